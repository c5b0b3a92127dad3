import logging
import os

from .main import create_app

logger = logging.getLogger(__name__)

# Create Flask app
app = create_app()

if __name__ == "__main__":
    # Use PORT from environment or default to 8000 (the booking backend owns 5000)
    port = int(os.getenv("PORT", 8000))
    logger.info("Starting server", extra={"context": {"port": port}})
    app.run(host="0.0.0.0", port=port, debug=os.getenv("FLASK_ENV") != "production")
