# app.py
from flask import Flask, jsonify, request, g
from flask_cors import CORS
from dotenv import load_dotenv
import os
import logging
import time
import sys
from werkzeug.middleware.proxy_fix import ProxyFix

from config import Config
from database import is_configured
from models.bible import default_catalogue
from routes.bible import bible_bp
from routes.readings import readings_bp
from utils.ai_lookup import PassageLookup
from utils.bible_client import BibleTextClient
from utils.navigation import ChapterNavigator
from utils.reading_plan import parse_plan_start
from utils.reference_parser import ReferenceParser

# Configure logging to output to stdout
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()


def create_app(config=None, catalogue=None, bible_client=None, passage_lookup=None):
    """
    Build the Flask app.

    `config` overrides Config values; the collaborators (catalogue, Bible
    text client, passage lookup) can be injected, which is how tests swap
    the external APIs out.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if config:
        app.config.update(config)

    # Use ProxyFix to handle proxy headers properly
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    app.json.sort_keys = False  # Preserve order of keys in JSON responses
    app.json.compact = True
    app.json.ensure_ascii = False  # Spanish text comes back readable

    CORS(app, resources={
        r"/api/*": {
            "origins": "*",
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"],
            "expose_headers": ["Content-Type", "Authorization"],
        }
    })

    # Ensure URLs with or without trailing slashes are handled the same way
    app.url_map.strict_slashes = False

    plan_start = app.config['READING_PLAN_START']
    if isinstance(plan_start, str):
        app.config['READING_PLAN_START'] = parse_plan_start(plan_start)

    catalogue = catalogue or default_catalogue()
    if bible_client is None:
        bible_client = BibleTextClient(
            base_url=app.config['BIBLE_API_BASE_URL'],
            timeout=app.config['BIBLE_API_TIMEOUT'],
        )
    if passage_lookup is None:
        passage_lookup = PassageLookup(
            api_key=app.config['ANTHROPIC_API_KEY'],
            model=app.config['ANTHROPIC_MODEL'],
        )

    app.extensions['catalogue'] = catalogue
    app.extensions['reference_parser'] = ReferenceParser(catalogue)
    app.extensions['bible_client'] = bible_client
    app.extensions['navigator'] = ChapterNavigator(bible_client)
    app.extensions['passage_lookup'] = passage_lookup

    logger.info(f"Loaded catalogue with {len(catalogue)} books ({catalogue.total_chapters} chapters)")
    if not is_configured():
        logger.warning("Supabase is not configured; authenticated endpoints will reject requests")

    # Register blueprints
    app.register_blueprint(bible_bp, url_prefix='/api/bible')
    app.register_blueprint(readings_bp, url_prefix='/api/readings')

    @app.before_request
    def before_request():
        g.start_time = time.time()

    @app.after_request
    def after_request(response):
        # Log request duration
        duration = time.time() - g.get('start_time', time.time())
        logger.info(f"Request to {request.path} took {duration:.2f} seconds")
        return response

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({
            'status': 'healthy',
            'bible_api': app.config['BIBLE_API_BASE_URL'],
            'supabase': 'configured' if is_configured() else 'not configured',
            'timestamp': time.time()
        })

    return app


app = create_app()

if __name__ == '__main__':
    print("Starting Flask server...")
    port = int(os.getenv('PORT', 5001))
    app.run(debug=True, port=port)
