# =============================================================================
# Classification HTTP Endpoint
# =============================================================================
# A small Flask app that exposes a trained model over HTTP:
#
#   POST /classify      body: raw message text (UTF-8)
#   -> 200 {"classification": "spam"}  or  {"classification": "ham"}
#
# The body is passed to the model verbatim. Empty or garbled text still gets
# a label (the priors decide), so the model never produces an error for bad
# input. CORS is open so a browser frontend on another origin can call us.
# =============================================================================

import logging
from typing import Protocol

from flask import Flask, jsonify, request
from flask_cors import CORS

from spamsift.core import Label
from spamsift.spam import ModelNotTrainedError

logger = logging.getLogger(__name__)


class Predictor(Protocol):
    """Anything with a predict(text) -> Label method."""

    def predict(self, text: str | None) -> Label: ...


def create_app(model: Predictor) -> Flask:
    """
    Build the Flask application around a trained model.

    Args:
        model: TrainedModel or NaiveBayesClassifier. Must be fully trained
               before the app starts serving.

    Returns:
        Configured Flask app.
    """
    app = Flask(__name__)
    CORS(
        app,
        resources={r"/classify": {"origins": "*"}},
        methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.route("/classify", methods=["POST"])
    def classify():
        text = request.get_data(as_text=True)

        try:
            label = model.predict(text)
        except ModelNotTrainedError as e:
            logger.error(f"Classification unavailable: {e}")
            return jsonify({"error": f"Model not available: {e}"}), 503

        logger.debug(f"Classified {len(text)} chars as {label.value}")
        return jsonify({"classification": label.value})

    return app


def serve(model: Predictor, host: str = "127.0.0.1", port: int = 8080) -> None:
    """Run the classification server until interrupted."""
    app = create_app(model)
    logger.info(f"Listening on http://{host}:{port}/classify")
    app.run(host=host, port=port)
