"""
Client for the /functions endpoints — invoke a named function with a JSON body.
"""
import logging
from typing import Dict

import requests

from app.config import FUNCTIONS_URL, FUNCTIONS_SECRET, FUNCTIONS_TIMEOUT
from app.errors import FunctionInvocationError

logger = logging.getLogger('services.functions')


def invoke_function(name: str, body: Dict) -> Dict:
    """
    POST body to FUNCTIONS_URL/<name> and return the parsed JSON reply.

    Raises FunctionInvocationError on transport failure, non-2xx status or a
    non-JSON reply.
    """
    url = f"{FUNCTIONS_URL.rstrip('/')}/{name}"
    headers = {'Content-Type': 'application/json'}
    if FUNCTIONS_SECRET:
        headers['Authorization'] = f"Bearer {FUNCTIONS_SECRET}"

    try:
        resp = requests.post(url, json=body, headers=headers, timeout=FUNCTIONS_TIMEOUT)
    except requests.RequestException as e:
        logger.error("Error invoking %s: %s", name, e)
        raise FunctionInvocationError(f"Could not reach function {name}: {e}") from e

    if not resp.ok:
        logger.error("Function %s returned HTTP %d: %s", name, resp.status_code, resp.text[:500])
        raise FunctionInvocationError(f"Function {name} returned HTTP {resp.status_code}")

    try:
        return resp.json()
    except ValueError as e:
        raise FunctionInvocationError(f"Function {name} returned a non-JSON reply") from e
