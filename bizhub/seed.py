import logging
from flask import current_app
from bizhub.models import db, User
from bizhub.utils.roles import ROLE_ADMIN

logger = logging.getLogger(__name__)


def seed():
    email = current_app.config["ADMIN_EMAIL"].lower()
    admin = User.query.filter_by(email=email).first()
    if admin:
        logger.info("Admin %s already exists", email)
        return admin

    admin = User(name="Platform Admin", email=email, role=ROLE_ADMIN)
    admin.set_password(current_app.config["ADMIN_PASSWORD"])
    db.session.add(admin)
    db.session.commit()
    logger.info("Admin %s created", email)
    return admin
