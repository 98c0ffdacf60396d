import argparse
import asyncio
import sys
from typing import BinaryIO, List, Optional

from .config import AppConfig, Credential, AUTH_ENV, load_app_config, resolve_credential
from .content import collect_content
from .debug import PROG, report
from .errors import GistError, ConfigError
from .github_gist import create_gist
from .models import UploadRequest


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        usage=f"{PROG} [ options ] [ file... ]",
        description="Upload files, or standard input when no files are given, to a GitHub gist.",
        epilog=f"Credentials are read from the {AUTH_ENV} environment variable as user:token.",
    )
    parser.add_argument("files", nargs="*", metavar="file", help="Files to upload; read standard input when omitted.")
    parser.add_argument("-m", dest="description", type=str, default="", help="gist description")
    parser.add_argument("-p", dest="public", action="store_true", help="create public gist")
    parser.add_argument("--timeout", type=float, default=None, help="Give up on the request after this many seconds (default: wait)")
    return parser


async def upload(
    files: List[str],
    credential: Credential,
    cfg: AppConfig,
    *,
    description: str = "",
    public: bool = False,
    stdin: Optional[BinaryIO] = None,
) -> str:
    """Collect the content, create the gist and return its URL."""
    contents = await collect_content(files, stdin)
    request = UploadRequest.from_contents(contents, description=description, public=public)
    result = await create_gist(request, credential, api_url=cfg.api.url, timeout=cfg.api.timeout)
    return result.html_url


def main(argv: Optional[List[str]] = None, stdin: Optional[BinaryIO] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = load_app_config(timeout=args.timeout)
        credential = resolve_credential(cfg.auth_raw)
    except ConfigError as e:
        report(str(e))
        parser.print_help(sys.stderr)
        return 1

    try:
        url = asyncio.run(upload(
            args.files,
            credential,
            cfg,
            description=args.description,
            public=args.public,
            stdin=stdin,
        ))
    except GistError as e:
        report(str(e))
        return 1
    except KeyboardInterrupt:
        return 130

    print(url)
    return 0
