from .server import create_server, create_app
from .ui import serve_layout
from .callbacks import register_callbacks

# Assemble
server = create_server()
app = create_app(server)

app.layout = serve_layout
register_callbacks(app)

__all__ = ["app", "server"]
