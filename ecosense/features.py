"""
EcoSense AI - Feature Routes
POST /features/<id> runs a feature processor on a multipart form.
GET /features/<id> describes the inputs a feature expects.
"""

import base64
import logging
import traceback

from flask import Blueprint, current_app, jsonify, request

from ecosense.completeness import is_filled
from ecosense.feature_processors import process_feature
from ecosense.feature_schema import describe_feature, get_feature, list_features, parse_feature_id, total_inputs

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create Blueprint
features_bp = Blueprint('features', __name__, url_prefix='/features')

SERVICES_KEY = 'ecosense.services'


def init_features(app, services):
    """Attach the processor services this app's routes should use"""
    app.extensions[SERVICES_KEY] = services


def _services():
    return current_app.extensions.get(SERVICES_KEY)


def file_reference(upload):
    """Werkzeug FileStorage -> plain JSON-ready dict"""
    content = upload.read()
    return {
        'filename': upload.filename,
        'mimeType': upload.mimetype or 'application/octet-stream',
        'size': len(content),
        'base64': base64.b64encode(content).decode('ascii'),
    }


def collect_form_data():
    form_data = {}
    for key, value in request.form.items():
        form_data[key] = value
    for key, upload in request.files.items():
        if upload and upload.filename:
            form_data[key] = file_reference(upload)
    return form_data


# ========================
# ROUTES
# ========================

@features_bp.route('/', methods=['GET'])
def catalogue():
    return jsonify({'success': True, 'features': list_features()})


@features_bp.route('/<feature_id>', methods=['GET'])
def feature_info(feature_id):
    parsed = parse_feature_id(feature_id)
    if parsed is None:
        return jsonify({'success': False, 'error': 'Invalid feature ID. Must be between 1 and 10.'}), 400

    return jsonify({'success': True, **describe_feature(parsed)})


@features_bp.route('/<feature_id>', methods=['POST'])
def run_feature(feature_id):
    parsed = parse_feature_id(feature_id)
    if parsed is None:
        return jsonify({'success': False, 'error': 'Invalid feature ID. Must be between 1 and 10.'}), 400

    try:
        form_data = collect_form_data()

        filled = [key for key in get_feature(parsed).input_keys() if is_filled(form_data.get(key))]
        if not filled:
            return jsonify({'success': False, 'error': 'No input data provided'}), 400

        logger.info(f"📥 Feature {parsed}: {len(filled)}/{total_inputs(parsed)} declared inputs filled")
        result = process_feature(parsed, form_data, _services())

        return jsonify({
            'success': True,
            'data': result,
            'message': 'Analysis completed successfully',
        })

    except Exception as e:
        logger.error(f"❌ Feature {parsed} error: {e}")
        traceback.print_exc()
        return jsonify({
            'success': False,
            'error': 'Failed to process feature',
            'details': str(e),
        }), 500
