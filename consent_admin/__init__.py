"""
Consent administration engine.

Reconciles the relying parties that receive a user's attributes against the
consent records stored for that user.
"""

from consent_admin.constants import CONSENT_ADMIN_VERSION

__version__ = CONSENT_ADMIN_VERSION
