"""llm-sdk 入口点。

支持: python -m llm_sdk
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
