from flask import Blueprint, render_template, current_app

ui_bp = Blueprint('ui', __name__)

@ui_bp.route('/')
def index():
    """Main page; servers are fetched by the browser from /api/servers."""
    return render_template('index.html', servers_dir=str(current_app.config['SERVERS_DIR']))
