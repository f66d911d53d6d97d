import os

basedir = os.path.abspath(os.path.dirname(__file__))

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Language-keyed question sets; the process refuses to start without them
    QUESTIONS_PATH = os.environ.get('QUESTIONS_PATH') or os.path.join(basedir, 'data', 'questions.json')
    DEFAULT_LANGUAGE = 'en'
    # Game clock (seconds)
    GAME_DURATION_SEC = int(os.environ.get('GAME_DURATION_SEC', '300'))
    # Interval between TIMER_SYNC pushes (seconds)
    TIMER_TICK_SEC = float(os.environ.get('TIMER_TICK_SEC', '1'))
    # Cookie carrying the player's session id
    SESSION_ID_COOKIE = os.environ.get('SESSION_ID_COOKIE', 'session_id')
    SESSION_COOKIE_MAX_AGE_SEC = int(os.environ.get('SESSION_COOKIE_MAX_AGE_SEC', str(24 * 60 * 60)))
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get(
            'CORS_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173'
        ).split(',') if o.strip()
    ]
