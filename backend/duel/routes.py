from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the chess duel server!'})

@main.route('/api/session', methods=['GET'])
def get_session():
    """
    Returns a read-only view of the current session for clients that
    have not joined yet.
    """
    coordinator = current_app.extensions['duel']
    with coordinator.lock:
        snapshot = coordinator.store.get()
    return jsonify(snapshot.to_dict()), 200
