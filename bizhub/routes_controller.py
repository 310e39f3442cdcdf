from bizhub.controllers.auth import auth_bp
from bizhub.controllers.business import business_bp
from bizhub.controllers.post import post_bp
from bizhub.controllers.product import product_bp
from bizhub.controllers.promotion import promotion_bp
from bizhub.controllers.dashboard import dashboard_bp
from bizhub.controllers.admin import admin_bp


def register_routes(app):
    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(business_bp, url_prefix="/api")
    app.register_blueprint(post_bp, url_prefix="/api")
    app.register_blueprint(product_bp, url_prefix="/api")
    app.register_blueprint(promotion_bp, url_prefix="/api")
    app.register_blueprint(dashboard_bp, url_prefix="/api")
    app.register_blueprint(admin_bp, url_prefix="/api")
