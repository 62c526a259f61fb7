#!/usr/bin/env python3
"""
Application runner for the PDF Research Assistant
"""
import sys
import argparse
import json
import logging
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from config import settings


def setup_file_logging():
    """Setup logging with a rotating file under ./logs"""
    from utils.logging import setup_logging

    logs_dir = Path("logs")
    logs_dir.mkdir(exist_ok=True)

    setup_logging(
        log_level=settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file or str(logs_dir / "app.log")
    )


def run_server():
    """Run the application server"""
    import uvicorn
    from main import app

    setup_file_logging()

    logger = logging.getLogger(__name__)
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Host: {settings.host}:{settings.port}")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=True,
        server_header=False,
        date_header=False
    )


def run_health_check():
    """Run a health check against the running service"""
    import requests

    base_url = f"http://{settings.host}:{settings.port}"

    try:
        response = requests.get(f"{base_url}/health", timeout=10)
        print(f"Health Check Status: {response.status_code}")
        print(json.dumps(response.json(), indent=2))

        response = requests.get(f"{base_url}/health/ready", timeout=10)
        print(f"\nReadiness Status: {response.status_code}")
        print(json.dumps(response.json(), indent=2))

        return response.status_code == 200

    except requests.exceptions.RequestException as e:
        print(f"Health check failed: {e}")
        return False


def run_validate_key():
    """Check the configured API key with a trivial generation call"""
    from services.credential_store import CredentialStore
    from services.llm_service import LLMService

    llm_service = LLMService(credential_store=CredentialStore.from_settings())
    valid = llm_service.validate_credential()
    print("API key is valid" if valid else "API key is missing or invalid")
    return valid


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(description="PDF Research Assistant Runner")
    parser.add_argument(
        "command",
        choices=["server", "health", "validate-key"],
        help="Command to run"
    )

    args = parser.parse_args()

    if args.command == "server":
        run_server()
    elif args.command == "health":
        sys.exit(0 if run_health_check() else 1)
    elif args.command == "validate-key":
        sys.exit(0 if run_validate_key() else 1)


if __name__ == "__main__":
    main()
