"""
Supabase API Client
Verifies user access tokens and reads/writes rows through PostgREST
"""

from typing import Any, Dict, List, Optional, Tuple

import httpx
import structlog

from ..config import get_settings
from ..utils.helpers import truncate_text

logger = structlog.get_logger("saleshub.store.supabase_client")


class SupabaseError(Exception):
    """Supabase API error"""
    pass


class AuthenticationError(Exception):
    """Missing or rejected access token"""
    pass


def parse_content_range_total(header: Optional[str]) -> int:
    """Total row count from a PostgREST Content-Range header ("0-19/57")"""
    if not header or "/" not in header:
        return 0
    total = header.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else 0


class SupabaseClient:
    """Asynchronous Supabase Auth + PostgREST client"""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = get_settings()
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self.settings.supabase_url

    def _service_headers(self) -> Dict[str, str]:
        key = self.settings.supabase_service_role_key or ""
        return {
            "Authorization": f"Bearer {key}",
            "apikey": key,
            "Content-Type": "application/json"
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.settings.supabase_timeout_seconds,
            transport=self._transport
        )

    async def get_user(self, access_token: str) -> Dict[str, Any]:
        """
        Resolve the user behind an access token

        Raises:
            AuthenticationError: token rejected by Supabase Auth
            SupabaseError: Auth service unreachable
        """
        if not access_token:
            raise AuthenticationError("Missing access token")

        headers = {
            "Authorization": f"Bearer {access_token}",
            "apikey": self.settings.supabase_anon_key or self.settings.supabase_service_role_key or ""
        }

        async with self._client() as client:
            try:
                response = await client.get("/auth/v1/user", headers=headers)
            except httpx.HTTPError as e:
                logger.error(f"Auth request failed: {e}")
                raise SupabaseError(f"Auth service unavailable: {e}") from e

        if response.status_code in (401, 403):
            raise AuthenticationError("Invalid or expired token")
        if response.is_error:
            raise SupabaseError(f"Auth service error: {response.status_code}")

        user = response.json()
        if not user or not user.get("id"):
            raise AuthenticationError("Invalid or expired token")
        return user

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Make a PostgREST request with the service role key"""
        headers = self._service_headers()
        headers.update(kwargs.pop("headers", {}))

        async with self._client() as client:
            try:
                response = await client.request(method, path, headers=headers, **kwargs)
            except httpx.HTTPError as e:
                logger.error(f"Database request failed: {e}", method=method, path=path)
                raise SupabaseError(f"Database unavailable: {e}") from e

        if response.is_error:
            logger.error(
                "Database request rejected",
                method=method,
                path=path,
                status_code=response.status_code,
                body=truncate_text(response.text, 200)
            )
            raise SupabaseError(f"Database {method} failed: {response.status_code}")

        return response

    async def insert_row(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as stored (with id, created_at)"""
        response = await self._request(
            "POST",
            f"/rest/v1/{table}",
            json=row,
            headers={"Prefer": "return=representation"}
        )
        rows = response.json()
        if not rows:
            raise SupabaseError(f"Insert into {table} returned no row")
        return rows[0] if isinstance(rows, list) else rows

    async def select_rows(
        self,
        table: str,
        filters: Dict[str, Any],
        limit: int = 20,
        offset: int = 0,
        order: str = "created_at.desc"
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Select rows matching equality filters

        Returns:
            (rows, total number of matching rows)
        """
        params = {key: f"eq.{value}" for key, value in filters.items()}
        params.update({"order": order, "limit": limit, "offset": offset})

        response = await self._request(
            "GET",
            f"/rest/v1/{table}",
            params=params,
            headers={"Prefer": "count=exact"}
        )
        rows = response.json()
        total = parse_content_range_total(response.headers.get("content-range"))
        return rows, max(total, offset + len(rows))

    async def get_row(self, table: str, filters: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """First row matching filters, or None"""
        params = {key: f"eq.{value}" for key, value in filters.items()}
        params["limit"] = 1
        response = await self._request("GET", f"/rest/v1/{table}", params=params)
        rows = response.json()
        return rows[0] if rows else None

    async def delete_rows(self, table: str, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Delete rows matching filters, returns the deleted rows"""
        if not filters:
            raise ValueError("Refusing to delete without filters")
        params = {key: f"eq.{value}" for key, value in filters.items()}
        response = await self._request(
            "DELETE",
            f"/rest/v1/{table}",
            params=params,
            headers={"Prefer": "return=representation"}
        )
        return response.json() if response.content else []


# Global instance
supabase_client = SupabaseClient()
