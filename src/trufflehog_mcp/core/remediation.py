"""
Static report content: detector catalog, remediation guides, status page.
"""

from typing import Optional

from trufflehog_mcp.core.config import TruffleHogMCPConfig
from trufflehog_mcp.infrastructure.installation_cache import InstallationStatusEntry

COMMON_DETECTORS: tuple[tuple[str, str], ...] = (
    ("AWS", "AWS Access Keys and Secret Keys"),
    ("Azure", "Azure credentials and connection strings"),
    ("GCP", "Google Cloud Platform credentials"),
    ("GitHub", "GitHub personal access tokens and OAuth tokens"),
    ("GitLab", "GitLab tokens and credentials (V3 detector)"),
    ("Slack", "Slack tokens and webhooks"),
    ("Stripe", "Stripe API keys"),
    ("Twilio", "Twilio API credentials"),
    ("SendGrid", "SendGrid API keys"),
    ("Mailchimp", "Mailchimp API keys"),
    ("HubSpot", "HubSpot API keys"),
    ("Datadog", "Datadog API and application keys"),
    ("PagerDuty", "PagerDuty API tokens"),
    ("Okta", "Okta API tokens"),
    ("Auth0", "Auth0 credentials"),
    ("Firebase", "Firebase credentials and tokens"),
    ("MongoDB", "MongoDB connection strings"),
    ("PostgreSQL", "PostgreSQL connection strings"),
    ("MySQL", "MySQL connection strings"),
    ("Redis", "Redis connection strings"),
    ("SSH", "SSH private keys"),
    ("JWT", "JSON Web Tokens (with verification)"),
    ("Generic", "Generic high-entropy strings"),
    ("Plaid", "Plaid API keys"),
    ("Netlify", "Netlify personal tokens"),
    ("Fastly", "Fastly personal tokens"),
    ("Monday", "Monday.com API tokens"),
    ("Ngrok", "Ngrok authentication tokens"),
    ("Mux", "Mux API credentials"),
    ("Posthog", "PostHog API keys"),
    ("Dropbox", "Dropbox access tokens"),
    ("Databricks", "Databricks tokens"),
    ("Jira", "Jira API tokens"),
    ("Salesforce", "Salesforce OAuth2 tokens"),
)

REMEDIATION_GUIDES: dict[str, str] = {
    "AWS": """
## AWS Credentials Remediation

1. **Immediate Actions**:
   - Disable the compromised access key in AWS IAM console
   - Create a new access key pair
   - Update all applications using the old credentials

2. **Investigation**:
   - Review CloudTrail logs for unauthorized access
   - Check for any resources created by the compromised key
   - Review IAM policies attached to the user/role

3. **Prevention**:
   - Use IAM roles instead of long-lived access keys
   - Enable MFA for all IAM users
   - Implement least-privilege access policies
""",
    "GitHub": """
## GitHub Token Remediation

1. **Immediate Actions**:
   - Revoke the token in GitHub Settings > Developer Settings > Personal Access Tokens
   - Create a new token with minimal required scopes
   - Update all integrations using the old token

2. **Investigation**:
   - Review GitHub audit logs for unauthorized activity
   - Check for any unauthorized commits or changes
   - Review repository access logs

3. **Prevention**:
   - Use fine-grained personal access tokens
   - Set token expiration dates
   - Use GitHub Apps instead of personal tokens for integrations
""",
    "Slack": """
## Slack Token Remediation

1. **Immediate Actions**:
   - Revoke the token in Slack Admin > Apps
   - Regenerate bot tokens if applicable
   - Update all integrations using the old token

2. **Investigation**:
   - Review Slack access logs
   - Check for any unauthorized messages or actions
   - Review app permissions

3. **Prevention**:
   - Use scoped OAuth tokens
   - Regularly rotate tokens
   - Monitor token usage with Slack audit logs
""",
}

DEFAULT_REMEDIATION_GUIDE = """
## General Secret Remediation

1. **Immediate Actions**:
   - Revoke or rotate the compromised credential
   - Update all applications using the credential
   - Monitor for unauthorized access

2. **Investigation**:
   - Review logs for any unauthorized activity
   - Determine the scope of potential exposure
   - Document the incident

3. **Prevention**:
   - Use secret managers (HashiCorp Vault, AWS Secrets Manager)
   - Implement secret rotation policies
   - Use pre-commit hooks to prevent secrets in code
"""

INSTALL_HINT = """
TruffleHog CLI is not installed. Install it with:
```bash
# macOS
brew install trufflehog

# Linux/Windows
# Download from https://github.com/trufflesecurity/trufflehog/releases
```
"""


def format_detector_catalog() -> str:
    """Render the common detectors as a Markdown table."""
    rows = "".join(f"| {name} | {description} |\n" for name, description in COMMON_DETECTORS)
    return f"""# TruffleHog Detectors

TruffleHog supports 800+ secret detectors. Here are common ones:

| Detector | Description |
|----------|-------------|
{rows}
## Notes
- TruffleHog automatically verifies secrets against the respective service APIs
- Run `trufflehog --help` for a complete list of supported detectors
- Custom detectors can be configured via the configuration file
"""


def remediation_guide(detector_type: str) -> str:
    """Return the guide for a detector, matched case-insensitively."""
    for name, guide in REMEDIATION_GUIDES.items():
        if name.lower() == detector_type.strip().lower():
            return guide
    return DEFAULT_REMEDIATION_GUIDE


def format_finding_analysis(
    detector_type: str,
    verified: Optional[bool] = None,
    source_type: Optional[str] = None,
) -> str:
    """Render a risk assessment and remediation guide for one finding."""
    if verified:
        verified_text = "YES - Immediate action required!"
        risk = (
            "**HIGH RISK**: This secret was verified as active. An attacker with access "
            "to this secret could potentially access your systems."
        )
    else:
        verified_text = "No / Unknown"
        risk = (
            "**MEDIUM RISK**: This secret should be rotated as a precaution, even if "
            "verification failed."
        )

    return f"""# Finding Analysis

## Summary
- **Secret Type**: {detector_type}
- **Verified Active**: {verified_text}
- **Source**: {source_type or "Unknown"}

## Risk Assessment
{risk}

{remediation_guide(detector_type)}
## TruffleHog Enterprise Features

With TruffleHog Enterprise, you can:
- Automatically track secret remediation status
- Set up alerts for new findings
- Use TruffleHog Analyze to understand secret permissions
- Configure pre-commit hooks to prevent future leaks
"""


def format_status(entry: InstallationStatusEntry, config: TruffleHogMCPConfig) -> str:
    """Render installation state and configuration, never revealing the API key."""
    notes = "TruffleHog CLI is ready to use." if entry.installed else INSTALL_HINT
    return f"""# TruffleHog Status

## Installation
- **Installed**: {"Yes" if entry.installed else "No"}
- **Version**: {entry.version}

## Configuration
- **API URL**: {config.enterprise.api_url or "Not configured"}
- **API Key**: {"Configured (hidden)" if config.enterprise.api_key else "Not configured"}
- **Scanner Group**: {config.enterprise.scanner_group or "Not configured"}
- **Webhook URL**: {config.webhook.url or "Not configured"}

## Notes
{notes}
"""
