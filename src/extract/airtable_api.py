"""
Airtable API Client - Pure I/O Operations

This module handles all calls to the Airtable REST API with no business logic.
Returns raw record lists that can be flattened by the data fetcher.
"""

import requests
import time
from typing import Dict, List, Any, Optional
from urllib.parse import quote
import logging

from src.coreutils.env import env_get
from src.coreutils.request import new_session, get_json_simple

logger = logging.getLogger(__name__)

# API Endpoints
DEFAULT_API_URL = "https://api.airtable.com/v0"

REQUEST_TIMEOUT = 30


class AirtableAPIClient:
    """Pure API client for one Airtable base"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_id: Optional[str] = None,
        api_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key or env_get("AIRTABLE_API_KEY")
        if not self.api_key:
            raise ValueError("AIRTABLE_API_KEY environment variable is not set")

        self.base_id = base_id or env_get("AIRTABLE_BASE_ID")
        if not self.base_id:
            raise ValueError("AIRTABLE_BASE_ID environment variable is not set")

        self.api_url = (
            api_url or env_get("AIRTABLE_API_URL", DEFAULT_API_URL)
        ).rstrip("/")
        self.session = session or new_session(
            {"Authorization": f"Bearer {self.api_key}"}
        )

    def table_url(self, table_name: str) -> str:
        """URL of a table inside the configured base"""
        return f"{self.api_url}/{self.base_id}/{quote(table_name, safe='')}"

    def fetch_page(
        self,
        table_name: str,
        sort_field: Optional[str] = None,
        offset: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Fetch a single page of records

        Args:
            table_name: Airtable table name
            sort_field: Optional field to sort ascending by
            offset: Pagination token returned by the previous page

        Returns:
            Dict: Raw page payload with "records" and optionally "offset"
        """
        params: Dict[str, Any] = {}
        if sort_field:
            params["sort[0][field]"] = sort_field
            params["sort[0][direction]"] = "asc"
        if offset:
            params["offset"] = offset

        return get_json_simple(
            self.session, self.table_url(table_name), params=params, timeout=REQUEST_TIMEOUT
        )

    def fetch_all(
        self, table_name: str, sort_field: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Fetch every record of a table, following pagination until exhausted

        Args:
            table_name: Airtable table name
            sort_field: Optional field to sort ascending by

        Returns:
            List[Dict]: Records in the order the API returned them
        """
        logger.info(f"Fetching all records from table {table_name!r}")
        start_time = time.time()

        records: List[Dict[str, Any]] = []
        offset = None
        pages = 0

        try:
            while True:
                page = self.fetch_page(table_name, sort_field=sort_field, offset=offset)
                pages += 1
                records.extend(page.get("records", []))

                offset = page.get("offset")
                if not offset:
                    break
                logger.debug(f"Table {table_name!r}: page {pages} done, continuing")

        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching table {table_name!r}: {e}")
            raise

        elapsed = time.time() - start_time
        logger.info(
            f"Fetched {len(records)} records from {table_name!r} "
            f"in {pages} pages: {elapsed:.2f} seconds"
        )
        return records
