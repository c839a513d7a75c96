from analytics_demo.server import ServerFactory
from analytics_demo import config


def test_health_endpoint(flask_client):
    rv = flask_client.get("/health")
    assert rv.status_code == 200
    js = rv.get_json()
    assert js["status"] == "ok"
    assert js["mode"] == "demo"
    assert "time" in js


def test_tables_endpoint_lists_aliases(flask_client):
    rv = flask_client.get("/api/tables")
    assert rv.status_code == 200
    tables = rv.get_json()["tables"]
    assert "dau" in tables
    assert "monthly_revenue" in tables


def test_server_factory_title():
    settings = config.get_settings()
    factory = ServerFactory(settings)
    server = factory.create_server()
    app = factory.create_app(server)
    # Dash app title comes from settings
    assert app.title == settings.app_title
    assert app.server is server
