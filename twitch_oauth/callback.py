"""Callback URL parsing for the implicit grant redirect"""

import logging
from typing import Dict, Mapping
from urllib.parse import parse_qs, urlparse

from .models import RedirectOutcome, RedirectResult


logger = logging.getLogger(__name__)


def parse_callback_params(query: str) -> Dict[str, str]:
    """Parse a query or fragment string, keeping the first value of each key"""
    parsed = parse_qs(query, keep_blank_values=True)
    return {key: values[0] for key, values in parsed.items() if values}


def parse_callback_url(url: str) -> Dict[str, str]:
    """Extract callback parameters from a redirect URL

    Twitch returns implicit grant results in the URL fragment and errors in
    the query string, so both are read. Fragment values win on conflict.

    Args:
        url: Full callback URL

    Returns:
        Dict of callback parameters
    """
    parsed = urlparse(url.strip())
    params = parse_callback_params(parsed.query)
    params.update(parse_callback_params(parsed.fragment))
    return params


def result_from_params(params: Mapping[str, str]) -> RedirectResult:
    """Classify callback parameters into a redirect result

    Args:
        params: Parsed callback parameters

    Returns:
        DENIED when the provider reported an error, SUCCESS otherwise
    """
    params = dict(params)
    error = params.get("error")
    if error:
        logger.info(f"Provider returned error: {error}")
        if params.get("error_description"):
            logger.debug(f"Error description: {params['error_description']}")
        return RedirectResult(outcome=RedirectOutcome.DENIED, params=params)

    return RedirectResult(outcome=RedirectOutcome.SUCCESS, params=params)
