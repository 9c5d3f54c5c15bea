"""Serving the composed app with the pounce ASGI server.

Pounce is an optional dependency (``pip install tandem[server]``);
any other ASGI server can run the app returned by ``create_app()``.
"""

from tandem._internal.asgi import ASGIApp


def run_server(app: ASGIApp, host: str, port: int) -> None:
    """Start a single-worker pounce server with the given ASGI app."""
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = "tandem serve needs the pounce server: pip install 'tandem[server]'"
        raise SystemExit(msg) from exc

    config = ServerConfig(host=host, port=port, workers=1)
    server = Server(config, app)
    server.run()
