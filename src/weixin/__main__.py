"""
python -m weixin <cmd>    — API operations (authorize-url, token, userinfo, ...)
"""

import sys


def main() -> None:
    if len(sys.argv) < 2:
        print(
            "Usage: weixin <authorize-url|token|web-token|userinfo|ticket|sign> ...",
            file=sys.stderr,
        )
        sys.exit(1)

    from .client import main as client_main

    client_main()


if __name__ == "__main__":
    main()
