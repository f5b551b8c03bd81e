"""
Coming soon banner component - Footer notice while the store is not launched.
"""

from .component import (
    BANNER_TEXT,
    REST_NONCE_ACTION,
    build_viewer_context,
    evaluate,
    on_user_login,
    render_banner,
    role_for,
    run_footer,
    should_show_banner,
)
from .models import (
    BannerDecision,
    BannerReason,
    FooterBannerInput,
    FooterBannerOutput,
    UserRole,
    ViewerContext,
)
from .ports import NonceIssuerPort, OptionsReaderPort, UserMetaStorePort

__all__ = [
    # Entry points
    "run_footer",
    "on_user_login",
    # Functional core
    "evaluate",
    "should_show_banner",
    "role_for",
    "render_banner",
    "build_viewer_context",
    # Models
    "ViewerContext",
    "BannerDecision",
    "BannerReason",
    "UserRole",
    "FooterBannerInput",
    "FooterBannerOutput",
    # Ports
    "UserMetaStorePort",
    "OptionsReaderPort",
    "NonceIssuerPort",
    # Constants
    "BANNER_TEXT",
    "REST_NONCE_ACTION",
]
