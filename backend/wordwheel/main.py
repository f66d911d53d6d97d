from flask import Blueprint, current_app, jsonify, request
import uuid

main = Blueprint('main', __name__)

@main.route('/')
def index():
    response = jsonify({'message': 'Welcome to the Word Wheel game server!'})
    cookie_name = current_app.config.get('SESSION_ID_COOKIE', 'session_id')
    if not request.cookies.get(cookie_name):
        response.set_cookie(
            cookie_name,
            str(uuid.uuid4()),
            max_age=int(current_app.config.get('SESSION_COOKIE_MAX_AGE_SEC', 86400)),
            path='/',
            httponly=True,
        )
    return response

@main.route('/api/languages')
def languages():
    store = current_app.extensions['session_store']
    return jsonify({
        'languages': store.catalog.languages(),
        'default': store.catalog.default_language,
    })

@main.route('/health')
def health():
    store = current_app.extensions['session_store']
    return jsonify({'status': 'ok', 'sessions': len(store)})
