# --- Entry point for the backend API ---
import os
from dotenv import load_dotenv

from gta_insights.app import configure_logging, create_app

# Load environment variables
load_dotenv()

configure_logging(os.environ.get("LOG_LEVEL", "INFO").upper())

app = create_app()

if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("app:app", host=os.environ.get("HOST", "0.0.0.0"), port=port, reload=os.environ.get("RELOAD", "false").lower() == "true")
