"""
API Server Entry Point

Starts the FastAPI server on localhost and opens the UI in the browser
"""

import logging
import threading
import webbrowser

import uvicorn
from contact_extractor.api.server import create_app
from contact_extractor.config.settings import get_settings


def main():
    """Start the contact extractor UI"""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(settings)
    url = f"http://{settings.api_host}:{settings.api_port}"

    print(f"\n🚀 Starting Email Contact Extractor on {url}")
    print(f"🤖 Model: {settings.google_model}")
    if not settings.google_api_key:
        print("⚠️  GOOGLE_API_KEY is not set - extraction requests will fail")
    print()

    if settings.open_browser:
        threading.Timer(1.0, webbrowser.open, args=(url,)).start()

    # Start server
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
