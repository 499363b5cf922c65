"""命令行入口。

用法:
    python -m llm_sdk "draw a cute caterpillar" --quality hd --style natural

token、base URL 和超时从环境变量读取（见 llm_sdk.config）。
"""

from __future__ import annotations

import argparse
import asyncio
import hashlib
import logging
import sys
from pathlib import Path

from .api import (
    ImageGenerationRequest,
    ImageGenerationResponse,
    ImageQuality,
    ImageResponseFormat,
    ImageSize,
    ImageStyle,
)
from .client import LLMSDK
from .config import get_sdk_config
from .errors import LLMSDKError

__all__ = ["main", "build_parser", "save_image"]

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="llm_sdk",
        description="Generate images via the OpenAI images API",
    )
    parser.add_argument("prompt", help="Text description of the desired image")
    parser.add_argument("--count", "-n", type=_positive_int, help="Number of images to generate")
    parser.add_argument("--quality", type=ImageQuality, choices=list(ImageQuality),
                        metavar="{standard,hd}")
    parser.add_argument("--response-format", type=ImageResponseFormat,
                        choices=list(ImageResponseFormat), metavar="{url,b64_json}")
    parser.add_argument("--size", type=ImageSize, choices=list(ImageSize),
                        metavar="{1024x1024,1792x1024,1024x1792}")
    parser.add_argument("--style", type=ImageStyle, choices=list(ImageStyle),
                        metavar="{vivid,natural}")
    parser.add_argument("--user", help="End-user identifier")
    parser.add_argument("--output-dir", type=Path,
                        help="Save base64 results into this directory")
    parser.add_argument("--prefix", default="image", help="File name prefix for saved images")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _find_next_seq(output_dir: Path, base_name: str, ext: str) -> int:
    """找到下一个可用的序号。"""
    seq = 0
    while (output_dir / f"{base_name}_{seq}.{ext}").exists():
        seq += 1
    return seq


def save_image(data: bytes, output_dir: Path, prefix: str) -> tuple[str, str]:
    """保存图片到文件。

    Returns:
        (file_path, sha256) 元组
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    seq = _find_next_seq(output_dir, prefix, "png")
    file_path = output_dir / f"{prefix}_{seq}.png"

    file_path.write_bytes(data)
    sha256 = hashlib.sha256(data).hexdigest()

    return str(file_path.absolute()), sha256


def _request_from_args(args: argparse.Namespace) -> ImageGenerationRequest:
    return ImageGenerationRequest(
        prompt=args.prompt,
        count=args.count,
        quality=args.quality,
        response_format=args.response_format,
        size=args.size,
        style=args.style,
        user=args.user,
    )


def _report(response: ImageGenerationResponse, args: argparse.Namespace) -> None:
    for i, image in enumerate(response.images):
        if image.base64_json is not None and args.output_dir is not None:
            path, sha256 = save_image(image.image_bytes(), args.output_dir, args.prefix)
            print(f"[{i}] {path} (sha256={sha256[:12]})")
        elif image.url:
            print(f"[{i}] {image.url}")
        elif image.base64_json is not None:
            print(f"[{i}] <base64:{len(image.base64_json)} bytes> (use --output-dir to save)")
        if image.revised_prompt:
            print(f"    Revised prompt: {image.revised_prompt}")


async def _run(args: argparse.Namespace) -> ImageGenerationResponse:
    async with LLMSDK.from_env(get_sdk_config()) as sdk:
        return await sdk.create_image(_request_from_args(args))


def main(argv: list[str] | None = None) -> int:
    """主入口点。"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING,
        handlers=[logging.StreamHandler(sys.stderr)],
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logging.getLogger("llm_sdk").setLevel(logging.DEBUG if args.verbose else logging.INFO)

    try:
        response = asyncio.run(_run(args))
        _report(response, args)
    except (LLMSDKError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0
