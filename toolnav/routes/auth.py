from flask import Blueprint, jsonify, session
from flask_login import login_user, logout_user, login_required, current_user
from toolnav.models import AdminUser
from toolnav.utils.helpers import log_activity, json_error, get_json_body, clean_str

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

@auth_bp.route('/login', methods=['POST'])
def login():
    data = get_json_body()
    if data is None:
        return json_error('Invalid request body', 400)
    username = data.get('username')
    password = data.get('password')
    if not isinstance(username, str) or not isinstance(password, str):
        return json_error('Missing required fields', 400)
    username = clean_str(username)
    if not username or not password:
        return json_error('Missing required fields', 400)

    user = AdminUser.query.filter_by(username=username).first()
    if user and user.check_password(password):
        session.permanent = True
        login_user(user)
        log_activity("Login", f"User {username} logged in")
        return jsonify({"user": user.to_dict()})

    log_activity("Login Failed", f"Failed login attempt for {username}")
    return json_error('Invalid credentials', 401)

@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    log_activity("Logout", f"User {current_user.username} logged out")
    logout_user()
    return jsonify({"success": True})

@auth_bp.route('/session', methods=['GET'])
def current_session():
    if current_user.is_authenticated:
        return jsonify({"authenticated": True, "user": current_user.to_dict()})
    return jsonify({"authenticated": False, "user": None})
