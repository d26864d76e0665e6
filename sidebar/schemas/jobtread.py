"""
JobTread proxy schemas.
"""

from typing import Any, Dict, Optional

from sidebar.schemas.common import CamelModel


class JobTreadRequest(CamelModel):
    """``{action, jobtreadApiKey?, params?}``; no key means demo data."""

    action: Optional[str] = None
    jobtread_api_key: Optional[str] = None
    params: Optional[Dict[str, Any]] = None
