import os

from flask import Flask, request, render_template, Response, session
from dotenv import load_dotenv
from werkzeug.exceptions import RequestEntityTooLarge

from coin_content import ACCEPTED_TYPES, MAX_UPLOAD_BYTES, MSG_TOO_LARGE
from controller import ControllerRegistry, CoinController
from error_log import log_error
from formatter import format_analysis
from site_config import SITE_CONFIG

load_dotenv()

app = Flask(__name__)
# A little above the upload limit so the controller's own size check reports it
app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_BYTES + 1024 * 1024  # 21 MB
app.secret_key = os.environ.get("FLASK_SECRET_KEY") or os.urandom(32).hex()

# The index page shows the bundled sample without any AI call
_NO_KEY_ALLOWED = {"static", "robots_txt", "index"}

registry = ControllerRegistry()


# ── Inject site config into every template automatically ──────────────────────
@app.context_processor
def inject_globals():
    return {"site": SITE_CONFIG, "accepted_types": ACCEPTED_TYPES}


@app.before_request
def require_api_key():
    if request.endpoint in _NO_KEY_ALLOWED:
        return
    if os.environ.get("AI_PROVIDER", "gemini_api") != "gemini_api":
        return
    if not os.environ.get("GEMINI_API_KEY"):
        return render_template("setup.html"), 503


@app.errorhandler(RequestEntityTooLarge)
def too_large(e):
    controller = _existing_controller() or registry.default_controller()
    controller.state.error = MSG_TOO_LARGE
    return _render(controller), 413


@app.errorhandler(500)
def internal_error(e):
    original = getattr(e, "original_exception", None) or e
    log_error(f"route={request.endpoint}", original)
    return render_template("error.html", message=f"Processing failed: {original}"), 500


# ── Helpers ───────────────────────────────────────────────────────────────────

def _existing_controller() -> CoinController | None:
    """Controller of the current browser session, if it has one."""
    session_id = session.get("sid")
    return registry.peek(session_id) if session_id else None


def _session_controller() -> CoinController:
    """Controller of the current browser session, registered on its first action."""
    session_id = session.get("sid")
    if not session_id:
        session_id = registry.new_session_id()
        session["sid"] = session_id
    return registry.get(session_id)


def _render(controller: CoinController) -> str:
    state = controller.state
    return render_template(
        "index.html",
        state=state,
        blocks=list(format_analysis(state.analysis)),
    )


# ── Routes ────────────────────────────────────────────────────────────────────

@app.route("/robots.txt")
def robots_txt():
    return Response("User-agent: *\nDisallow: /\n", mimetype="text/plain")


@app.route("/")
def index():
    # Visitors who never uploaded see the sample without taking a session slot
    return _render(_existing_controller() or registry.default_controller())


@app.route("/upload", methods=["POST"])
def upload():
    controller = _session_controller()
    controller.handle_upload(request.files.get("image"))
    registry.trim(keep=session["sid"])
    return _render(controller)


@app.route("/analyze", methods=["POST"])
def analyze():
    controller = _session_controller()
    controller.reanalyze()
    registry.trim(keep=session["sid"])
    return _render(controller)


if __name__ == "__main__":
    print("Starting on http://localhost:5000")
    app.run(debug=True, port=5000)
