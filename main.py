from flask import Flask, request, jsonify
from flask_cors import CORS
from dealmaker import StrategyEngine, StrategyPolicy
import os
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Enable CORS for all routes (the marketplace front end calls the API directly)
CORS(app)

# Initialize the strategy engine
engine = StrategyEngine(StrategyPolicy.from_env())


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Deal Maker API",
        "version": "1.0",
        "endpoints": {
            "deal_strategy": "/deal_strategy [POST]",
            "profit_split": "/profit_split [POST]",
            "equity_credit": "/equity_credit [POST]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


def _run(label, handler):
    """Run an engine entry point and map errors to JSON responses."""
    try:
        input_data = request.get_json(force=True, silent=True)

        if not input_data:
            return jsonify({
                "error": "No input data provided",
                "status": "failed"
            }), 400

        logger.info(f"Processing {label} request")
        result = handler(input_data)
        logger.info(f"{label} request processed successfully")

        return jsonify(result), 200

    except (ValueError, TypeError) as e:
        # Validation errors from engine
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        # Unexpected errors
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during processing",
            "status": "failed"
        }), 500


@app.route("/deal_strategy", methods=["POST"])
def deal_strategy():
    """
    Normalize seller/buyer rows, compute the deal strategy and render the narrative
    """
    return _run("deal_strategy", engine.build_from_dict)


@app.route("/profit_split", methods=["POST"])
def profit_split():
    """Subcontractor-style profit split summary"""
    return _run("profit_split", engine.profit_split_from_dict)


@app.route("/equity_credit", methods=["POST"])
def equity_credit():
    """Equity credit accrued over a payment history"""
    return _run("equity_credit", engine.equity_credit_from_dict)


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=False)
