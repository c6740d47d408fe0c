from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import Config
from utils.db import init_db_connection
from utils.errors import MentorMatchError
from utils.media import configure_media

# Import controllers
from controllers.auth_controller import auth_bp
from controllers.users_controller import users_bp
from controllers.notifications_controller import notifications_bp


def create_app(config_class=Config):
    app = Flask(__name__)                   # Initialize Flask app
    app.config.from_object(config_class)    # Load configuration from Config class
    app.logger.setLevel(app.config["LOG_LEVEL"])

    CORS(app, origins=app.config["CORS_ORIGINS"])
    init_db_connection(app)                 # Initialize MongoDB connection
    configure_media(app)                    # Cloudinary credentials

    # Register Blueprint
    app.register_blueprint(auth_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(notifications_bp)

    register_error_handlers(app)

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    return app


def register_error_handlers(app):

    @app.errorhandler(MentorMatchError)
    def handle_app_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"error": e.description}), e.code

    # Anything else: full trace in the server log, generic message to the client
    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Something went wrong"}), 500


# Run the app
if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=app.config.get("DEBUG", False))
