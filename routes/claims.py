from flask import Blueprint, current_app, render_template, request, redirect, url_for
from services import (LookupKeys, ValidationError, RateLimitError, GatewayError, NotFoundError,
                      NotConfirmedError, WidgetGoneError, DeliveryError)
from utils import hash_ip

claims_bp = Blueprint('claims', __name__)


def _components():
    return current_app.extensions['widget_claims']


def render_error(message, status):
    return render_template('error.html', message=message), status


def render_claim_form(error_message=None, status=200):
    widgets = _components().catalog.load()
    return render_template('claim.html', widgets=widgets, error_message=error_message), status


@claims_bp.route('/')
@claims_bp.route('/claim')
def claim_form():
    return render_claim_form()


@claims_bp.route('/claim', methods=['POST'])
def submit_claim():
    """Subscribe the visitor and start a claim"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    email = data.get('email', '')
    widget_id = data.get('widget_id', '')

    settings = current_app.config['SETTINGS']
    ip_hash = hash_ip(request.remote_addr or 'unknown', settings.ip_salt)

    try:
        claim = _components().claims.submit(email, widget_id, ip_hash)
    except ValidationError as e:
        return render_claim_form(e.message, 400)
    except RateLimitError as e:
        return render_error(e.message, 429)
    except GatewayError as e:
        print(f"[Claims] Subscription failed: {e}")
        return render_error(e.message, 502)

    return redirect(url_for('claims.check_email', email=claim.email))


@claims_bp.route('/check-email')
def check_email():
    email = request.args.get('email')
    if not email:
        return redirect(url_for('claims.claim_form'))
    return render_template('check_email.html', email=email)


@claims_bp.route('/confirmed')
def confirmed():
    """Landing page Kit redirects to after the visitor confirms their email"""
    keys = LookupKeys(
        subscriber_id=request.args.get('ck_subscriber_id') or request.args.get('subscriber_id'),
        token=request.args.get('token'),
        email=request.args.get('email')
    )

    try:
        claim, widget = _components().claims.confirm(keys)
    except (NotFoundError, WidgetGoneError) as e:
        return render_error(e.message, 404)

    return render_template('confirmed.html', claim=claim, widget=widget)


@claims_bp.route('/download/<token>')
def download(token):
    """Stream or redirect to the widget asset for a confirmed claim"""
    try:
        return _components().gate.open(token)
    except (NotFoundError, NotConfirmedError):
        return render_error(NotConfirmedError.message, 403)
    except WidgetGoneError as e:
        return render_error(e.message, 404)
    except DeliveryError as e:
        return render_error(e.message, 500)


@claims_bp.app_errorhandler(404)
def page_not_found(error):
    return render_error('The page you were looking for does not exist.', 404)
