import copy
import os


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {'1', 'true', 'yes', 'on'}


def _database_url():
    """Resolve the database URL, accepting a bare sqlite file path via DB_PATH"""
    url = os.environ.get('DATABASE_URL')
    if not url and os.environ.get('DB_PATH'):
        url = f"sqlite:///{os.environ['DB_PATH']}"
    url = url or 'sqlite:///widget_claims.db'

    # Handle PostgreSQL URL format for SQLAlchemy 2.0+
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


class Settings:
    """Application settings, built once at startup and handed to each component."""

    def __init__(self,
                 port=3000,
                 database_url='sqlite:///widget_claims.db',
                 secret_key='dev-secret-key-change-in-production',
                 widgets_path='config/widgets.json',
                 assets_dir='assets',
                 kit_api_key=None,
                 kit_form_id=None,
                 kit_tag_id=None,
                 kit_api_base='https://api.convertkit.com/v3',
                 kit_custom_token_field='widget_claim_token',
                 kit_custom_widget_field='widget_id',
                 kit_timeout=None,
                 download_base_url='',
                 support_email='support@senergygroup.com',
                 guide_url='https://example.com/guide.pdf',
                 shop_url='https://www.etsy.com/shop/SenergyGroup',
                 brand_name='SenergyGroup LLC',
                 ip_salt='senergygroup',
                 trust_proxy=False):
        self.port = port
        self.database_url = database_url
        self.secret_key = secret_key
        self.widgets_path = widgets_path
        self.assets_dir = assets_dir
        self.kit_api_key = kit_api_key
        self.kit_form_id = kit_form_id
        self.kit_tag_id = kit_tag_id
        self.kit_api_base = kit_api_base.rstrip('/')
        self.kit_custom_token_field = kit_custom_token_field
        self.kit_custom_widget_field = kit_custom_widget_field
        self.kit_timeout = kit_timeout
        self.download_base_url = download_base_url.rstrip('/')
        self.support_email = support_email
        self.guide_url = guide_url
        self.shop_url = shop_url
        self.brand_name = brand_name
        self.ip_salt = ip_salt
        self.trust_proxy = trust_proxy

    @property
    def kit_configured(self):
        return bool(self.kit_api_key and self.kit_form_id)

    def resolved(self, root):
        """Copy of these settings with relative file paths made absolute under `root`"""
        resolved = copy.copy(self)
        if not os.path.isabs(resolved.widgets_path):
            resolved.widgets_path = os.path.join(root, resolved.widgets_path)
        if not os.path.isabs(resolved.assets_dir):
            resolved.assets_dir = os.path.join(root, resolved.assets_dir)
        return resolved

    @classmethod
    def from_env(cls):
        """Build settings from environment variables (load .env before calling)"""
        timeout = os.environ.get('KIT_TIMEOUT')
        return cls(
            port=int(os.environ.get('PORT', '3000')),
            database_url=_database_url(),
            secret_key=os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production'),
            widgets_path=os.environ.get('WIDGETS_PATH', 'config/widgets.json'),
            assets_dir=os.environ.get('ASSETS_DIR', 'assets'),
            kit_api_key=os.environ.get('KIT_API_KEY') or None,
            kit_form_id=os.environ.get('KIT_FORM_ID') or None,
            kit_tag_id=os.environ.get('KIT_TAG_ID') or None,
            kit_api_base=os.environ.get('KIT_API_BASE', 'https://api.convertkit.com/v3'),
            kit_custom_token_field=os.environ.get('KIT_CUSTOM_TOKEN_FIELD', 'widget_claim_token'),
            kit_custom_widget_field=os.environ.get('KIT_CUSTOM_WIDGET_FIELD', 'widget_id'),
            kit_timeout=float(timeout) if timeout else None,
            download_base_url=os.environ.get('DOWNLOAD_BASE_URL', ''),
            support_email=os.environ.get('SUPPORT_EMAIL', 'support@senergygroup.com'),
            guide_url=os.environ.get('GUIDE_URL', 'https://example.com/guide.pdf'),
            shop_url=os.environ.get('SHOP_URL', 'https://www.etsy.com/shop/SenergyGroup'),
            brand_name=os.environ.get('BRAND_NAME', 'SenergyGroup LLC'),
            ip_salt=os.environ.get('IP_SALT', 'senergygroup'),
            trust_proxy=_env_flag('TRUST_PROXY'),
        )
