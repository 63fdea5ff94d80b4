"""
Auth service settings.

The auth API exposes one flat object with well over a hundred keys. The
local document groups them into parts (local, external providers,
security, mailer, SMS, MFA, hooks) which are flattened back into a single
attribute map, so users write e.g. ``disable_signup`` and
``external_github = {enabled = true, ...}`` side by side.

OAuth providers are nested blocks locally and ``external_<name>_<field>``
keys on the wire. Secrets are accepted on write but never echoed back, so
they are declared write-only and keep their declared value across reads.
"""

from dataclasses import dataclass
from typing import Any, Optional

from .base import SubdomainReconciler
from .fields import BOOL, INT, STRING, block, part, setting


def secret(description: str):
    """A sensitive string setting the API does not return"""
    return setting(STRING, description, write_only=True)


def _port_to_wire(port: int) -> str:
    return str(port)


def _port_from_wire(port: Any) -> Optional[int]:
    """The API reports smtp_port as a string; unparsable values are ignored"""
    try:
        return int(port)
    except (TypeError, ValueError):
        return None


@dataclass
class AuthLocalConfig:
    api_max_request_duration: object = setting(INT, "Maximum request duration in seconds")
    db_max_pool_size: object = setting(INT, "Maximum database connection pool size")
    disable_signup: object = setting(BOOL, "Disable new user signups")
    password_min_length: object = setting(INT, "Minimum password length")
    password_hibp_enabled: object = setting(BOOL, "Enable Have I Been Pwned password validation")
    password_required_characters: object = setting(
        STRING, "Required character types in passwords (e.g., lower, upper, number, special)"
    )
    jwt_exp: object = setting(INT, "JWT token expiration time in seconds")
    site_url: object = setting(STRING, "Site URL for redirects and email links")
    uri_allow_list: object = setting(STRING, "Comma-separated list of allowed redirect URIs")


@dataclass
class ExternalProviderConfig:
    enabled: object = setting(BOOL, "Enable the provider")
    client_id: object = setting(STRING, "OAuth application client ID")
    secret: object = secret("OAuth application secret")
    url: object = setting(STRING, "OAuth server URL")
    additional_client_ids: object = setting(STRING, "Additional client IDs")


def provider(key: str, label: str):
    return block(ExternalProviderConfig, f"{label} OAuth configuration", prefix=f"external_{key}")


@dataclass
class AuthExternalConfig:
    external_anonymous_users_enabled: object = setting(BOOL, "Enable anonymous users")
    external_email_enabled: object = setting(BOOL, "Enable email/password authentication")
    external_phone_enabled: object = setting(BOOL, "Enable phone authentication")
    external_google_skip_nonce_check: object = setting(BOOL, "Skip nonce check for Google OAuth")

    external_apple: object = provider("apple", "Apple")
    external_azure: object = provider("azure", "Azure")
    external_bitbucket: object = provider("bitbucket", "Bitbucket")
    external_discord: object = provider("discord", "Discord")
    external_facebook: object = provider("facebook", "Facebook")
    external_figma: object = provider("figma", "Figma")
    external_github: object = provider("github", "GitHub")
    external_gitlab: object = provider("gitlab", "GitLab")
    external_google: object = provider("google", "Google")
    external_kakao: object = provider("kakao", "Kakao")
    external_keycloak: object = provider("keycloak", "Keycloak")
    external_linkedin_oidc: object = provider("linkedin_oidc", "LinkedIn (OIDC)")
    external_notion: object = provider("notion", "Notion")
    external_slack: object = provider("slack", "Slack")
    external_slack_oidc: object = provider("slack_oidc", "Slack (OIDC)")
    external_spotify: object = provider("spotify", "Spotify")
    external_twitch: object = provider("twitch", "Twitch")
    external_twitter: object = provider("twitter", "Twitter")
    external_workos: object = provider("workos", "WorkOS")
    external_zoom: object = provider("zoom", "Zoom")


@dataclass
class AuthSecurityConfig:
    security_captcha_enabled: object = setting(BOOL, "Enable CAPTCHA for authentication")
    security_captcha_provider: object = setting(
        STRING, "CAPTCHA provider (hcaptcha, recaptcha, turnstile)"
    )
    security_captcha_secret: object = secret("CAPTCHA provider secret key")
    rate_limit_anonymous_users: object = setting(INT, "Rate limit for anonymous users per hour")
    rate_limit_email_sent: object = setting(INT, "Rate limit for emails sent per hour")
    rate_limit_otp: object = setting(INT, "Rate limit for OTP requests per hour")
    rate_limit_sms_sent: object = setting(INT, "Rate limit for SMS sent per hour")
    rate_limit_token_refresh: object = setting(INT, "Rate limit for token refresh requests per hour")
    rate_limit_verify: object = setting(INT, "Rate limit for verification requests per hour")
    refresh_token_rotation_enabled: object = setting(BOOL, "Enable refresh token rotation")
    security_manual_linking_enabled: object = setting(BOOL, "Enable manual account linking")
    security_refresh_token_reuse_interval: object = setting(
        INT, "Refresh token reuse interval in seconds"
    )
    security_update_password_require_reauthentication: object = setting(
        BOOL, "Require reauthentication for password updates"
    )
    sessions_inactivity_timeout: object = setting(INT, "Session inactivity timeout in seconds")
    sessions_single_per_user: object = setting(BOOL, "Allow only one session per user")
    sessions_tags: object = setting(STRING, "Session tags for categorization")
    sessions_timebox: object = setting(INT, "Session timebox duration in seconds")
    saml_allow_encrypted_assertions: object = setting(BOOL, "Allow encrypted SAML assertions")
    saml_enabled: object = setting(BOOL, "Enable SAML authentication")
    saml_external_url: object = setting(STRING, "External SAML URL")


@dataclass
class AuthMailerConfig:
    mailer_autoconfirm: object = setting(BOOL, "Automatically confirm user emails")
    mailer_allow_unverified_email_sign_ins: object = setting(
        BOOL, "Allow sign-ins with unverified emails"
    )
    mailer_secure_email_change_enabled: object = setting(BOOL, "Enable secure email change process")
    mailer_otp_exp: object = setting(INT, "Email OTP expiration time in seconds")
    mailer_otp_length: object = setting(INT, "Email OTP length")

    smtp_admin_email: object = setting(STRING, "SMTP admin email address")
    smtp_host: object = setting(STRING, "SMTP server hostname")
    smtp_max_frequency: object = setting(INT, "Maximum SMTP send frequency per hour")
    smtp_port: object = setting(
        INT, "SMTP server port", to_wire=_port_to_wire, from_wire=_port_from_wire
    )
    smtp_sender_name: object = setting(STRING, "SMTP sender display name")
    smtp_user: object = setting(STRING, "SMTP username")
    smtp_pass: object = secret("SMTP password")

    mailer_subjects_confirmation: object = setting(STRING, "Email confirmation subject template")
    mailer_subjects_email_change: object = setting(STRING, "Email change subject template")
    mailer_subjects_invite: object = setting(STRING, "User invite subject template")
    mailer_subjects_magic_link: object = setting(STRING, "Magic link subject template")
    mailer_subjects_reauthentication: object = setting(STRING, "Reauthentication subject template")
    mailer_subjects_recovery: object = setting(STRING, "Password recovery subject template")
    mailer_templates_confirmation_content: object = setting(
        STRING, "Email confirmation content template"
    )
    mailer_templates_email_change_content: object = setting(STRING, "Email change content template")
    mailer_templates_invite_content: object = setting(STRING, "User invite content template")
    mailer_templates_magic_link_content: object = setting(STRING, "Magic link content template")
    mailer_templates_reauthentication_content: object = setting(
        STRING, "Reauthentication content template"
    )
    mailer_templates_recovery_content: object = setting(STRING, "Password recovery content template")


@dataclass
class AuthSmsConfig:
    sms_provider: object = setting(STRING, "SMS provider (twilio, messagebird, textlocal, vonage)")
    sms_otp_length: object = setting(INT, "SMS OTP code length")
    sms_autoconfirm: object = setting(BOOL, "Automatically confirm SMS OTP")
    sms_max_frequency: object = setting(INT, "Maximum SMS send frequency per hour")
    sms_otp_exp: object = setting(INT, "SMS OTP expiration time in seconds")
    sms_template: object = setting(STRING, "SMS message template")
    sms_test_otp: object = secret("Test SMS OTP code for development")
    sms_test_otp_valid_until: object = setting(STRING, "Test SMS OTP valid until timestamp")

    sms_messagebird_access_key: object = secret("MessageBird access key")
    sms_messagebird_originator: object = setting(STRING, "MessageBird originator/sender ID")
    sms_textlocal_api_key: object = secret("Textlocal API key")
    sms_textlocal_sender: object = setting(STRING, "Textlocal sender name")
    sms_twilio_account_sid: object = setting(STRING, "Twilio account SID")
    sms_twilio_auth_token: object = secret("Twilio auth token")
    sms_twilio_content_sid: object = setting(STRING, "Twilio content SID")
    sms_twilio_message_service_sid: object = setting(STRING, "Twilio message service SID")
    sms_twilio_verify_account_sid: object = setting(STRING, "Twilio verify account SID")
    sms_twilio_verify_auth_token: object = secret("Twilio verify auth token")
    sms_twilio_verify_message_service_sid: object = setting(
        STRING, "Twilio verify message service SID"
    )
    sms_vonage_api_key: object = setting(STRING, "Vonage API key")
    sms_vonage_api_secret: object = secret("Vonage API secret")
    sms_vonage_from: object = setting(STRING, "Vonage sender number or name")


@dataclass
class AuthMfaConfig:
    mfa_max_enrolled_factors: object = setting(
        INT, "Maximum number of MFA factors a user can enroll"
    )
    mfa_phone_enroll_enabled: object = setting(BOOL, "Enable phone MFA enrollment")
    mfa_phone_max_frequency: object = setting(
        INT, "Maximum phone MFA verification attempts per hour"
    )
    mfa_phone_otp_length: object = setting(INT, "Phone MFA OTP code length")
    mfa_phone_template: object = setting(STRING, "Phone MFA SMS message template")
    mfa_phone_verify_enabled: object = setting(BOOL, "Enable phone MFA verification")
    mfa_totp_enroll_enabled: object = setting(BOOL, "Enable TOTP MFA enrollment")
    mfa_totp_verify_enabled: object = setting(BOOL, "Enable TOTP MFA verification")
    mfa_web_authn_enroll_enabled: object = setting(BOOL, "Enable WebAuthn MFA enrollment")
    mfa_web_authn_verify_enabled: object = setting(BOOL, "Enable WebAuthn MFA verification")


@dataclass
class AuthHooksConfig:
    hook_custom_access_token_enabled: object = setting(BOOL, "Enable custom access token hook")
    hook_custom_access_token_secrets: object = secret("Custom access token hook secrets")
    hook_custom_access_token_uri: object = setting(STRING, "Custom access token hook URI")
    hook_mfa_verification_attempt_enabled: object = setting(
        BOOL, "Enable MFA verification attempt hook"
    )
    hook_mfa_verification_attempt_secrets: object = secret("MFA verification attempt hook secrets")
    hook_mfa_verification_attempt_uri: object = setting(STRING, "MFA verification attempt hook URI")
    hook_password_verification_attempt_enabled: object = setting(
        BOOL, "Enable password verification attempt hook"
    )
    hook_password_verification_attempt_secrets: object = secret(
        "Password verification attempt hook secrets"
    )
    hook_password_verification_attempt_uri: object = setting(
        STRING, "Password verification attempt hook URI"
    )
    hook_send_email_enabled: object = setting(BOOL, "Enable send email hook")
    hook_send_email_secrets: object = secret("Send email hook secrets")
    hook_send_email_uri: object = setting(STRING, "Send email hook URI")
    hook_send_sms_enabled: object = setting(BOOL, "Enable send SMS hook")
    hook_send_sms_secrets: object = secret("Send SMS hook secrets")
    hook_send_sms_uri: object = setting(STRING, "Send SMS hook URI")


@dataclass
class AuthConfig:
    local: AuthLocalConfig = part(AuthLocalConfig)
    external: AuthExternalConfig = part(AuthExternalConfig)
    security: AuthSecurityConfig = part(AuthSecurityConfig)
    mailer: AuthMailerConfig = part(AuthMailerConfig)
    sms: AuthSmsConfig = part(AuthSmsConfig)
    mfa: AuthMfaConfig = part(AuthMfaConfig)
    hooks: AuthHooksConfig = part(AuthHooksConfig)


class AuthReconciler(SubdomainReconciler):
    name = "auth"
    attribute = "auth"
    config_class = AuthConfig
    read_path = "config/auth"
    write_path = "config/auth"
