#!/usr/bin/env python3
"""HeartLink server. Port configurable via PORT in .env (default 3000)."""

import logging

from heartlink import create_app
from heartlink.config import HOST, PORT

app = create_app()

if __name__ == "__main__":
    logging.getLogger("heartlink").info("Server heart beating at http://localhost:%s", PORT)
    app.run(host=HOST, port=PORT, debug=False)
