from __future__ import annotations

import uvicorn

from glassface_site.core.env import PORT, get_env_int

DEFAULT_PORT = 8000


def run() -> None:
    port = get_env_int(PORT, default=DEFAULT_PORT, min_value=1, max_value=65535)
    uvicorn.run("glassface_site.web.app:app", host="0.0.0.0", port=port, reload=False)


if __name__ == "__main__":
    run()
