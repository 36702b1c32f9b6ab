"""Startup summary: which build is running and how this instance is wired."""
import os
import subprocess
from sqlalchemy.engine import make_url


def build_version():
    """Git hash baked in by the Docker build, else the checkout's HEAD, else 'unknown'"""
    if os.environ.get('GIT_HASH'):
        return os.environ['GIT_HASH'][:8]
    try:
        return subprocess.check_output(['git', 'rev-parse', '--short=8', 'HEAD'],
                                       stderr=subprocess.DEVNULL).decode().strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return 'unknown'


def startup_lines(settings):
    """Label/value pairs describing the running configuration"""
    if settings.kit_configured:
        kit = f"form {settings.kit_form_id}" + (f", tag {settings.kit_tag_id}" if settings.kit_tag_id else "")
    else:
        kit = "not configured - claims are recorded but no confirmation email is sent"

    if settings.download_base_url:
        downloads = f"redirect to {settings.download_base_url}/<zip>"
    else:
        downloads = f"stream from {os.path.join(settings.assets_dir, 'zips')}"

    return [
        ('Brand', settings.brand_name),
        ('Version', build_version()),
        ('Database', make_url(settings.database_url).render_as_string(hide_password=True)),
        ('Catalog', settings.widgets_path),
        ('Kit', kit),
        ('Downloads', downloads),
        ('Client IP', 'X-Forwarded-For (ProxyFix)' if settings.trust_proxy else 'socket address'),
    ]


def print_startup_banner(settings):
    print("\033[96m" + "=" * 70 + "\033[0m")
    print("\033[93mWidget Claims\033[0m")
    for label, value in startup_lines(settings):
        print(f"   {label + ':':<11} {value}")
    if not settings.kit_configured:
        print("\033[91m   [Kit] Running in degraded mode\033[0m")
    print("\033[96m" + "=" * 70 + "\033[0m")
