"""
Entry point for the Timesheet REST backend
"""

import logging
from dotenv import load_dotenv

# Load environment variables from .env file before settings are read
load_dotenv()

from timesheet_rest.app import create_app
from timesheet_rest.config.settings import PORT

logger = logging.getLogger(__name__)

app = create_app()

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Timesheet REST backend on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
