"""
CareerCompass recommendation service.

Flask-free core: models, the LLM provider layer, and the event ranking
reconciler.
"""

__version__ = "0.1.0"
