"""Local Flask server that hosts the exchange rate widget."""

import logging
from datetime import datetime, timezone
from typing import Optional

from flask import Flask, jsonify, render_template_string, request

from .config import Config
from .services import NoRatesForDateError, RateBoard, RateService, RateServiceError
from .services.rate_board import today_iso
from .ui_template import HTML_TEMPLATE

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(
    rate_service: Optional[RateService] = None,
    board: Optional[RateBoard] = None,
) -> Flask:
    app = Flask(__name__)
    rate_service = rate_service or RateService()
    # The page writes the browser clipboard itself; the board tracks the badge.
    board = board or RateBoard(service=rate_service)

    @app.route("/")
    def index():
        return render_template_string(
            HTML_TEMPLATE,
            default_date=today_iso(),
            copy_badge_ms=board.copy_badge_ms,
        )

    @app.route("/api/rates")
    def get_rates():
        if "date" not in request.args:
            logger.info("GET /api/rates - refreshing %s", board.date)
            board.fetch_rates(board.date)
            return jsonify(board.snapshot())

        date = request.args["date"].strip()
        logger.info("GET /api/rates - date=%s", date)
        # A cleared date picker selects nothing.
        if date:
            board.select_date(date)
        return jsonify(board.snapshot())

    @app.route("/api/state")
    def get_state():
        return jsonify(board.snapshot())

    @app.route("/api/copy", methods=["POST"])
    def copy_rate():
        payload = request.get_json(silent=True) or {}
        mid = payload.get("mid")
        if isinstance(mid, bool) or not isinstance(mid, (int, float)):
            logger.warning("Invalid copy request: %s", payload)
            return jsonify({"error": "Field 'mid' must be a number"}), 400

        text = board.copy_rate(mid)
        return jsonify({"text": text, "copy_badge_ms": board.copy_badge_ms})

    @app.route("/api/tables/<date>")
    def get_table(date: str):
        logger.info("GET /api/tables/%s", date)
        try:
            table = rate_service.get_table(date)
            return jsonify(table.to_dict())
        except NoRatesForDateError as exc:
            return jsonify({"error": str(exc), "date": date}), 404
        except RateServiceError as exc:
            logger.error("Failed to return table for %s: %s", date, exc)
            return jsonify({"error": str(exc), "date": date}), 502
        except Exception as exc:  # pragma: no cover - defensive guard
            logger.error("Unexpected error in get_table", exc_info=True)
            return jsonify({"error": "Internal server error", "details": str(exc)}), 500

    @app.route("/health")
    def health():
        snapshot = board.snapshot()
        return jsonify(
            {
                "status": "healthy",
                "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
                "selected_date": snapshot["date"],
                "table_loaded": snapshot["table"] is not None,
                "error": snapshot["error"],
            }
        )

    return app


def main() -> None:
    configure_logging()
    app = create_app()

    print("=" * 72)
    print("NBP Exchange Rate Widget - Local Server")
    print("=" * 72)
    print("\n📡 Available endpoints:")
    print(f"  GET  http://{Config.HOST}:{Config.PORT}/")
    print(f"  GET  http://{Config.HOST}:{Config.PORT}/api/rates?date=<YYYY-MM-DD>")
    print(f"  GET  http://{Config.HOST}:{Config.PORT}/api/state")
    print(f"  POST http://{Config.HOST}:{Config.PORT}/api/copy")
    print(f"  GET  http://{Config.HOST}:{Config.PORT}/api/tables/<YYYY-MM-DD>")
    print(f"  GET  http://{Config.HOST}:{Config.PORT}/health")
    print("\n" + "=" * 72 + "\n")

    app.run(debug=Config.DEBUG, host=Config.HOST, port=Config.PORT)


if __name__ == "__main__":
    main()
