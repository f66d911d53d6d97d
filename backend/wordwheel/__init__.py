from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    CORS(flask_app, supports_credentials=True, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # The question catalog is required; a CatalogError here stops startup
    from wordwheel.catalog import load_catalog, CatalogError
    from wordwheel.store import SessionStore
    default_language = flask_app.config.get('DEFAULT_LANGUAGE', 'en')
    catalog = load_catalog(flask_app.config['QUESTIONS_PATH'], default_language=default_language)
    flask_app.extensions['session_store'] = SessionStore(
        catalog, duration=int(flask_app.config.get('GAME_DURATION_SEC', 300))
    )
    flask_app.logger.info(
        f"[catalog-load] path={flask_app.config['QUESTIONS_PATH']} languages={','.join(catalog.languages())}"
    )

    from wordwheel.main import main
    flask_app.register_blueprint(main)

    # Register Socket.IO event handlers
    from wordwheel.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('check-catalog')
    @click.argument('path', required=False)
    def check_catalog_command(path):
        """Validates a question file and prints per-language counts."""
        target = path or flask_app.config['QUESTIONS_PATH']
        try:
            checked = load_catalog(target, default_language=default_language)
        except CatalogError as exc:
            raise click.ClickException(str(exc))
        for language in checked.languages():
            _, questions = checked.resolve(language)
            click.echo(f"{language}: {len(questions)} questions")

    flask_app.cli.add_command(check_catalog_command)

    return flask_app
