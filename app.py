#!/usr/bin/env python3
"""
HTTP entry point for the translation resolution engine.

Uses environment variables (or a local .env file) for configuration.
Stores default to in-memory implementations seeded from the JSON export named
by TRANSLATION_SEED_PATH; deployments wire real stores through
create_translation_service().
"""
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from tangkhul_translate.api import create_app
from tangkhul_translate.config_loader import load_config_from_env
from tangkhul_translate.logging_config import setup_logging

config = load_config_from_env()
setup_logging(config.log_level)
logger = logging.getLogger(__name__)

app = create_app(config=config)


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 7860))
    logger.info(f"Starting translation API on port {port}")
    app.run(host="0.0.0.0", port=port, debug=False, threaded=True)
