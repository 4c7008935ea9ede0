"""
Error Capture Service - Root Entry Point.

For development: python main.py
For production: point uvicorn at ``main:app``
"""

from error_capture.main import get_application, run_development_server

app = get_application()

if __name__ == "__main__":
    run_development_server()
