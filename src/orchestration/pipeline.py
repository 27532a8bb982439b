"""
Menu Pipeline - Request Handler and Local Runner

One workflow, two entry points:
1. handler(event, context):
   - Called by the hosting platform on every menu request
   - Fetches Sections, Products and SectionPrices fresh from Airtable
   - Returns an HTTP-style {statusCode, body} envelope
2. main():
   - Command line runner for local development
   - Prints the menu or writes it to a JSON file

Any failure aborts the whole run; no partial menu is ever returned.
"""

import os
import sys
import traceback
from typing import Optional, Dict, Any
import logging

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

# Extract layer imports
from src.extract.airtable_api import AirtableAPIClient
from src.extract.data_fetcher import (
    fetch_raw_sections,
    fetch_raw_products,
    fetch_raw_section_prices,
)

# Transform layer imports
from src.transformation.transformers import assemble_menu, get_summary_stats

# Load layer imports
from src.load.local_storage import save_json, to_json

from src.coreutils.env import env_get
from src.coreutils.logging import setup_logging

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "Failed to fetch menu data"


class MenuPipeline:
    """Fetches the menu tables and assembles the menu document"""

    def __init__(self, client: Optional[AirtableAPIClient] = None):
        """
        Initialize the menu pipeline

        Args:
            client: Airtable client (built from environment variables if not provided)
        """
        self.client = client or AirtableAPIClient()

    def run(self) -> Dict[str, Any]:
        """
        Run the pipeline once

        Returns:
            Dict: Menu document
        """
        logger.info("🚀 Starting menu pipeline")

        try:
            # Step 1: Extract, one table after another
            sections_df = fetch_raw_sections(self.client)
            products_df = fetch_raw_products(self.client)
            prices_df = fetch_raw_section_prices(self.client)

            logger.info(
                f"Fetched {sections_df.height} sections, {products_df.height} products, "
                f"{prices_df.height} prices"
            )

            # Step 2: Transform
            menu = assemble_menu(sections_df, products_df, prices_df)

            logger.info("✅ Menu pipeline completed")
            return menu

        except Exception as e:
            logger.error(f"❌ Menu pipeline failed: {e}")
            raise


_pipeline: Optional[MenuPipeline] = None


def get_pipeline() -> MenuPipeline:
    """Shared pipeline, built on first use and reused across invocations"""
    global _pipeline
    if _pipeline is None:
        _pipeline = MenuPipeline()
    return _pipeline


def success_response(menu: Dict[str, Any]) -> Dict[str, Any]:
    return {"statusCode": 200, "body": to_json(menu)}


def error_response(error: Exception) -> Dict[str, Any]:
    return {
        "statusCode": 500,
        "body": to_json(
            {
                "error": ERROR_MESSAGE,
                "details": str(error),
                "stack": "".join(
                    traceback.format_exception(type(error), error, error.__traceback__)
                ),
            }
        ),
    }


def handler(event: Any = None, context: Any = None) -> Dict[str, Any]:
    """
    HTTP entry point. The request itself is ignored; the full menu is
    always returned.

    Returns:
        Dict: {statusCode: 200, body: menu JSON} or
              {statusCode: 500, body: {error, details, stack} JSON}
    """
    try:
        menu = get_pipeline().run()
        return success_response(menu)

    except Exception as e:
        logger.exception(f"❌ {ERROR_MESSAGE}: {e}")
        return error_response(e)


def main(argv=None):
    """Main entry point for command line usage"""
    import argparse

    parser = argparse.ArgumentParser(description="Airtable Menu Pipeline")
    parser.add_argument(
        "--output", "-o", help="Write the menu JSON to this file instead of stdout"
    )
    parser.add_argument("--log-dir", help="Also write logs to a dated file here")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    args = parser.parse_args(argv)

    # Setup logging
    if args.verbose:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, env_get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    setup_logging(log_level, args.log_dir)

    try:
        menu = MenuPipeline().run()
        logger.info(f"📊 Summary: {get_summary_stats(menu)}")

        if args.output:
            save_json(menu, args.output)
        else:
            print(to_json(menu, indent=2))

        return 0

    except Exception as e:
        logger.error(f"❌ Pipeline failed: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
