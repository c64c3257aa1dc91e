"""Package entry point for ``python -m yt_digest``.

HOW: Delegates to the CLI's main(); ``--serve`` starts the HTTP API
instead.
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from yt_digest.server.app import run_api
        run_api()
    else:
        from yt_digest.cli import main
        main()
