import os
import re
import logging
from flask import Flask, render_template, redirect, url_for, request, flash, abort
from jinja2 import TemplateError
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from models import (db, add_prompt, list_prompts, set_completed,
                    add_word_count, list_word_counts)

PORT = 7000

# Word counts are stored as SQLite INTEGER (signed 64-bit)
_INT_RE = re.compile(r'[+-]?[0-9]+')
_INT_MIN, _INT_MAX = -2**63, 2**63 - 1

basedir = os.path.abspath(os.path.dirname(__file__))

app = Flask(__name__)
app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-production")
app.config["SQLALCHEMY_DATABASE_URI"] = os.environ.get(
    "DATABASE_URL",
    "sqlite:///" + os.path.join(basedir, "prompts.db"),
)
app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False

db.init_app(app)

@app.template_filter('fmt_timestamp')
def fmt_timestamp_filter(value):
    """Render a stored timestamp as 'YYYY-MM-DD HH:MM'."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.strftime("%Y-%m-%d %H:%M")


# ── Helpers ───────────────────────────────────────────────────────────────────

def parse_int(raw):
    """Parse a signed decimal integer, or return None if it isn't one."""
    if raw is None or not _INT_RE.fullmatch(raw):
        return None
    value = int(raw)
    if value < _INT_MIN or value > _INT_MAX:
        return None
    return value


def storage_error(action, err):
    app.logger.error("Could not %s: %s", action, err)
    return f"Could not {action}: {err}", 500, {"Content-Type": "text/plain; charset=utf-8"}


@app.errorhandler(HTTPException)
def http_error(e):
    # Keep the exception's own headers (e.g. Allow on a 405)
    response = e.get_response()
    response.set_data(e.description or "")
    response.content_type = "text/plain; charset=utf-8"
    return response


@app.errorhandler(TemplateError)
def template_error(e):
    app.logger.error("Template error: %s", e)
    return str(e), 500, {"Content-Type": "text/plain; charset=utf-8"}


# ── Prompts ───────────────────────────────────────────────────────────────────

@app.route("/", methods=["GET", "POST"])
@app.route("/add", methods=["GET", "POST"])
def add_prompt_page():
    if request.method == "POST":
        text = request.form.get("prompt", "")
        try:
            add_prompt(text)
        except SQLAlchemyError as e:
            return storage_error("save prompt", e)
        flash("Prompt saved.", "success")
        return redirect(url_for("view_prompts"), code=303)
    return render_template("add_prompt.html")


@app.route("/view")
def view_prompts():
    try:
        prompts = list_prompts(completed=False)
    except SQLAlchemyError as e:
        return storage_error("retrieve prompts", e)
    return render_template("view_prompts.html", prompts=prompts)


@app.route("/complete")
def complete_prompt():
    raw_id = request.args.get("id", "")
    if raw_id == "":
        abort(400, "Missing ID")
    prompt_id = parse_int(raw_id)
    if prompt_id is None:
        abort(400, "Invalid ID")
    try:
        set_completed(prompt_id)
    except SQLAlchemyError as e:
        return storage_error("mark prompt as completed", e)
    flash(f"Prompt #{prompt_id} completed.", "success")
    return redirect(url_for("view_prompts"), code=303)


@app.route("/view_completed")
def view_completed_prompts():
    try:
        prompts = list_prompts(completed=True)
    except SQLAlchemyError as e:
        return storage_error("retrieve completed prompts", e)
    return render_template("view_completed_prompts.html", prompts=prompts)


# ── Word counts ───────────────────────────────────────────────────────────────

@app.route("/words")
def view_word_counts():
    try:
        samples = list_word_counts()
    except SQLAlchemyError as e:
        return storage_error("retrieve word count", e)
    return render_template("word_count.html", samples=samples)


@app.route("/words/add", methods=["GET", "POST"])
def add_word_count_page():
    if request.method == "POST":
        raw = request.form.get("wordcount", "")
        wordcount = parse_int(raw)
        if wordcount is None:
            abort(400, f"Invalid word count: {raw!r} is not an integer")
        try:
            add_word_count(wordcount)
        except SQLAlchemyError as e:
            return storage_error("save wordcount", e)
        flash(f"Logged {wordcount} words.", "success")
        return redirect(url_for("view_word_counts"), code=303)
    return render_template("word_count.html", samples=None)


with app.app_context():
    db.create_all()

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.logger.info("Starting server on :%d...", PORT)
    app.run(host="0.0.0.0", port=PORT, threaded=True)
