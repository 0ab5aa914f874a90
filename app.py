import os

ASYNC_MODE = os.environ.get('SOCKETIO_ASYNC_MODE', 'gevent')
if ASYNC_MODE == 'gevent':
    from gevent import monkey
    monkey.patch_all()

from flask import Flask, render_template, redirect, url_for, session, jsonify
from flask_socketio import SocketIO, emit
from game.logic import TicTacToe
import random, string, time

app = Flask(__name__)
app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'a_secret_key')
if 'SECRET_KEY' not in os.environ:
    print("[config] SECRET_KEY not set, using the development key")
socketio = SocketIO(app, async_mode=ASYNC_MODE)

SESSION_TTL = int(os.environ.get('SESSION_TTL', 3600))   # seconds idle before a game is dropped
MAX_GAMES   = int(os.environ.get('MAX_GAMES', 256))

# session id -> {"game": TicTacToe, "last_seen": epoch seconds}
games = {}

# ── Helpers ───────────────────────────────────────────────────────────────────
def new_session_id(): return ''.join(random.choices(string.ascii_uppercase + string.digits, k=10))

def prune_games(now):
    for sid, game_data in list(games.items()):
        if now - game_data["last_seen"] > SESSION_TTL:
            del games[sid]
            print(f"[game] Dropped idle session {sid}")
    while games and len(games) >= MAX_GAMES:
        oldest = min(games, key=lambda s: games[s]["last_seen"])
        del games[oldest]
        print(f"[game] Dropped session {oldest} (limit {MAX_GAMES})")

def current_game():
    """Controller for the caller's session, created on first use."""
    now = time.time()
    sid = session.get('game_id')
    if sid is None or sid not in games:
        prune_games(now)
        sid = sid or new_session_id()
        session['game_id'] = sid
        games[sid] = {"game": TicTacToe(), "last_seen": now}
        print(f"[game] New game for session {sid}")
    game_data = games[sid]
    game_data["last_seen"] = now
    return game_data["game"]

def socket_game(event, data):
    """Session game for a socket event, or None after rejecting it.

    The id must come from the page's session cookie; a socket cannot start
    a game the HTTP side would never see.
    """
    if 'game_id' not in session:
        reject(event, data, "no game for this session, load the page first")
        return None
    return current_game()

def int_field(data, key):
    value = data[key]
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{key} must be an integer, got {value!r}")
    return value

def reject(event, data, err):
    print(f"[game] Rejected {event} {data!r}: {err}")
    emit('invalid', {'error': str(err)})

# ── Routes ───────────────────────────────────────────────────────────────────
@app.route('/')
def index(): return render_template('index.html', state=current_game().state())

@app.route('/state')
def state(): return jsonify(current_game().state())

@app.route('/new', methods=['POST'])
def new_game():
    games.pop(session.get('game_id'), None)
    current_game()
    return redirect(url_for('index'))

# ── SocketIO Events ───────────────────────────────────────────────────────────
@socketio.on('play')
def play(data):
    g = socket_game('play', data)
    if g is None: return
    try:
        g.play_at(int_field(data, 'cell'))
    except (KeyError, TypeError, IndexError) as e:
        reject('play', data, e); return
    emit('state', g.state())

@socketio.on('jump')
def jump(data):
    g = socket_game('jump', data)
    if g is None: return
    try:
        g.jump_to(int_field(data, 'step'))
    except (KeyError, TypeError, IndexError) as e:
        reject('jump', data, e); return
    emit('state', g.state())

@socketio.on('toggle_order')
def toggle_order(data=None):
    g = socket_game('toggle_order', data)
    if g is None: return
    g.toggle_order()
    emit('state', g.state())

if __name__ == "__main__":
    socketio.run(app,
                 host=os.environ.get('HOST', '127.0.0.1'),
                 port=int(os.environ.get('PORT', 5000)),
                 debug=os.environ.get('FLASK_DEBUG') == '1')
