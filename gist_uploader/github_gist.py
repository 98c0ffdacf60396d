import asyncio
import json
import aiohttp
from typing import Optional
from pydantic import ValidationError

from .config import Credential, DEFAULT_API_URL
from .debug import make_debug_logger
from .errors import TransportError, RefusedError, DecodeError
from .models import UploadRequest, UploadResult

_dbg = make_debug_logger("github_gist")


async def create_gist(
    request: UploadRequest,
    credential: Credential,
    api_url: str = DEFAULT_API_URL,
    timeout: Optional[float] = None,
) -> UploadResult:
    """
    Create a GitHub Gist with a single POST.

    Args:
        request: the files, description and visibility to upload
        credential: user/token pair sent as HTTP Basic auth
        api_url: gist creation endpoint
        timeout: total request timeout in seconds, None to wait indefinitely
    Returns:
        The UploadResult carrying the gist's html_url.
    Raises:
        TransportError: if the request could not be sent or the body not read
        RefusedError: if the response status is anything but 201
        DecodeError: if the 201 body is not the expected JSON object
    """
    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "Authorization": aiohttp.encode_basic_auth(credential.username, credential.token),
    }
    body = json.dumps(request.to_payload())
    _dbg(f"POST {api_url} files={list(request.files)} public={request.public} bytes={len(body)}")
    try:
        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout)) as session:
            async with session.post(api_url, data=body, headers=headers) as resp:
                _dbg(f"status {resp.status}")
                if resp.status != 201:
                    try:
                        text = (await resp.read()).decode("utf-8", errors="replace")
                    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                        raise RefusedError(resp.status, None, read_error=e) from e
                    raise RefusedError(resp.status, text)
                raw = await resp.read()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise TransportError(str(e) or type(e).__name__) from e
    return parse_result(raw)


def parse_result(raw: bytes) -> UploadResult:
    """Decode a 201 body and pull out the gist URL."""
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise DecodeError(f"decoding response: {e}") from e
    try:
        return UploadResult.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"decoding response: no html_url in {raw[:200]!r}") from e
