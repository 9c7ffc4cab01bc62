"""
Recommendation routes for API endpoints.
"""
import logging

from flask import Blueprint, jsonify, request

from .models import MissingInputError, RecommendationRequest
from .services import RecommendationService

_LOG = logging.getLogger("recommendations")


def create_recommendation_routes(recommendation_service: RecommendationService) -> Blueprint:
    """Create recommendations routes blueprint."""
    bp = Blueprint('recommendations', __name__, url_prefix='/api')

    @bp.route('/recommendations', methods=['POST'])
    def recommend_events():
        """
        Rank candidate events for a student.

        JSON body:
            - userProfile: {major, careerGoal}
            - events: candidate events (non-empty)
            - userRatings: the user's past ratings (optional)
            - userEvents: per-event statuses used to exclude decided events (optional)
        """
        payload = request.get_json(silent=True)

        try:
            req = RecommendationRequest.from_dict(payload)
        except MissingInputError as exc:
            return jsonify({"error": str(exc)}), 400
        except ValueError as exc:
            return jsonify({"error": "Invalid request", "details": str(exc)}), 400

        try:
            return jsonify(recommendation_service.recommend(req))
        except ValueError as exc:
            return jsonify({"error": "Invalid request", "details": str(exc)}), 400
        except Exception as exc:
            _LOG.exception("Failed to get recommendations")
            return jsonify({"error": "Failed to get recommendations", "details": str(exc)}), 500

    return bp
