"""
EcoSense AI - Environmental Intelligence Demo Backend
Application factory
"""

import logging
import traceback

from flask import Flask, jsonify
from flask_cors import CORS

from ecosense import config

__version__ = '1.0.0'


def create_app(overrides=None):
    app = Flask(__name__)

    # ===============================
    #  BASIC CONFIGURATION
    # ===============================
    app.config.update(
        SECRET_KEY=config.SECRET_KEY,
        MAX_CONTENT_LENGTH=config.MAX_UPLOAD_MB * 1024 * 1024,
    )
    # Feature results keep their insertion order on the wire
    app.json.sort_keys = False

    # ===============================
    #  FEATURE CONFIGURATION
    # ===============================
    app.config.update(
        SIMULATE_LATENCY=config.SIMULATE_LATENCY,
        CORS_ORIGINS=config.CORS_ORIGINS,
        QUIET_WERKZEUG=config.QUIET_WERKZEUG,
        FEATURE_SERVICES=None,
    )

    if overrides:
        app.config.update(overrides)

    if app.config['QUIET_WERKZEUG']:
        logging.getLogger('werkzeug').setLevel(logging.ERROR)

    CORS(app, origins=app.config['CORS_ORIGINS'])
    config.validate_env()

    # ===============================
    #  REGISTER BLUEPRINTS
    # ===============================
    try:
        from ecosense.feature_processors import FeatureServices
        from ecosense.features import features_bp, init_features

        services = app.config['FEATURE_SERVICES'] or FeatureServices(
            simulate_latency=app.config['SIMULATE_LATENCY']
        )
        init_features(app, services)
        app.register_blueprint(features_bp)
        print("✅ Features module loaded")
    except Exception as e:
        print(f"❌ Failed to load Features: {e}")
        traceback.print_exc()

    @app.route('/health')
    def health_check():
        """Health check endpoint"""
        return jsonify({
            'status': 'healthy',
            'app': 'EcoSense AI',
            'version': __version__,
            'modules': {
                'features': 'features' in app.blueprints,
            },
            'integrations': {
                'openweather': bool(config.OPENWEATHER_API_KEY),
                'huggingface': bool(config.HUGGINGFACE_API_KEY),
                'gemini': bool(config.GEMINI_API_KEY),
            },
        })

    # ===============================
    #  ERROR HANDLERS
    # ===============================

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({
            'error': 'Not Found',
            'message': 'The requested resource was not found',
            'status': 404
        }), 404

    @app.errorhandler(413)
    def too_large(error):
        return jsonify({
            'error': 'Payload Too Large',
            'message': f"Uploads are limited to {config.MAX_UPLOAD_MB} MB",
            'status': 413
        }), 413

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({
            'error': 'Internal Server Error',
            'message': 'An unexpected error occurred',
            'status': 500
        }), 500

    return app
