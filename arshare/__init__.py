import logging
from flask import Flask, g
from werkzeug.middleware.proxy_fix import ProxyFix
from .config import Config
from .models import db
from .services.resolver import SqlShareStore
from flask_migrate import Migrate


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config())
    if overrides:
        app.config.update(overrides)
    logging.basicConfig(format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    logging.getLogger('arshare').setLevel(app.config['LOG_LEVEL'])
    db.init_app(app)
    Migrate(app, db)
    # Trust reverse proxy headers (Render/Heroku)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)
    app.extensions['share_store'] = SqlShareStore()

    with app.app_context():
        db.create_all()

    from .routes_public import bp as public_bp
    from .routes_api import bp as api_bp
    from .routes_admin import bp as admin_bp
    app.register_blueprint(public_bp)
    app.register_blueprint(api_bp, url_prefix='/api')
    app.register_blueprint(admin_bp, url_prefix='/admin')

    @app.after_request
    def set_device_cookie(resp):
        cookie = g.pop('device_cookie', None)
        if cookie:
            name, value, opts = cookie
            resp.set_cookie(name, value, **opts)
        return resp

    @app.get('/health')
    def health():
        return {'ok': True}

    return app
