"""
Finding model, NDJSON parsing, and Markdown rendering.

trufflehog --json writes one JSON object per finding on stdout, sometimes
interleaved with non-JSON diagnostic lines. Parsing is lenient: lines that
do not decode to a finding record are dropped. The unredacted Raw/RawV2
fields of a record are never read.
"""

import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

logger = logging.getLogger(__name__)

NO_FINDINGS_MESSAGE = "No secrets found."

# Metadata keys that can carry secret material; compared case-insensitively
SENSITIVE_METADATA_KEYS = frozenset(
    {
        "raw",
        "rawv2",
        "secret",
        "password",
        "token",
        "private_key",
        "privatekey",
        "api_key",
        "apikey",
        "access_token",
        "client_secret",
    }
)


@dataclass(frozen=True)
class Finding:
    """
    One detected secret, as reported by the engine (already redacted).

    Attributes:
        detector_name: Human-readable detector name (e.g. "AWS").
        detector_type: Numeric detector identifier.
        decoder_name: Decoder that surfaced the secret (PLAIN, BASE64, ...).
        source_name: Name of the scanned source.
        source_type: Numeric source type identifier.
        source_id: Numeric source identifier.
        verified: Whether the engine confirmed the secret is live.
        redacted: Redacted excerpt of the secret.
        extra_data: Detector-specific context.
        source_metadata: Source-specific context (file, commit, line, ...).
    """

    detector_name: str
    detector_type: int = 0
    decoder_name: str = ""
    source_name: str = ""
    source_type: int = 0
    source_id: int = 0
    verified: bool = False
    redacted: str = ""
    extra_data: dict[str, Any] = field(default_factory=dict)
    source_metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Finding":
        """Build a Finding from a decoded trufflehog JSON record."""
        source_metadata = record.get("SourceMetadata") or {}
        data = source_metadata.get("Data") if isinstance(source_metadata, Mapping) else None
        extra = record.get("ExtraData")
        return cls(
            detector_name=str(record.get("DetectorName") or ""),
            detector_type=_as_int(record.get("DetectorType")),
            decoder_name=str(record.get("DecoderName") or ""),
            source_name=str(record.get("SourceName") or ""),
            source_type=_as_int(record.get("SourceType")),
            source_id=_as_int(record.get("SourceID")),
            verified=record.get("Verified") is True,
            redacted=str(record.get("Redacted") or ""),
            extra_data=dict(extra) if isinstance(extra, Mapping) else {},
            source_metadata=dict(data) if isinstance(data, Mapping) else {},
        )


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def _decode_line(line: str) -> Optional[Finding]:
    """Decode one output line, or None if it is not a finding record."""
    try:
        record = json.loads(line)
    except (ValueError, RecursionError):
        return None
    if not isinstance(record, dict):
        return None
    if "DetectorName" not in record and "DetectorType" not in record:
        return None
    return Finding.from_record(record)


def iter_findings(output: str) -> Iterator[Finding]:
    """Lazily yield findings from NDJSON output in order of appearance."""
    # Only \n ends a record; other line boundaries may appear unescaped inside one
    lines = (line.strip() for line in output.split("\n"))
    decoded = (_decode_line(line) for line in lines if line)
    return (finding for finding in decoded if finding is not None)


def parse_findings(output: str) -> list[Finding]:
    """
    Parse engine stdout into findings.

    Non-JSON and non-finding lines are skipped. No deduplication is done:
    a secret present in many commits yields one finding per occurrence.

    Args:
        output: Raw standard output of a trufflehog --json run.

    Returns:
        Findings in the order they appear in the output.
    """
    findings = list(iter_findings(output))
    logger.debug(f"Parsed {len(findings)} finding(s) from {len(output)} bytes of output")
    return findings


def scrub_metadata(value: Any) -> Any:
    """Recursively drop keys that may hold raw secret material."""
    if isinstance(value, Mapping):
        return {
            k: scrub_metadata(v)
            for k, v in value.items()
            if str(k).lower() not in SENSITIVE_METADATA_KEYS
        }
    if isinstance(value, (list, tuple)):
        return [scrub_metadata(v) for v in value]
    return value


def _pretty(value: Mapping[str, Any]) -> str:
    return json.dumps(scrub_metadata(value), indent=2, default=str)


def format_findings(findings: list[Finding]) -> str:
    """
    Render findings as a numbered Markdown report.

    Returns:
        The report, or NO_FINDINGS_MESSAGE when the list is empty.
    """
    if not findings:
        return NO_FINDINGS_MESSAGE

    sections = []
    for i, f in enumerate(findings, 1):
        sections.append(
            f"""
## Finding {i}
- **Detector**: {f.detector_name}
- **Verified**: {"Yes" if f.verified else "No"}
- **Source**: {f.source_name}
- **Redacted Secret**: {f.redacted}
- **Extra Data**: {_pretty(f.extra_data)}
- **Source Metadata**: {_pretty(f.source_metadata)}
"""
        )

    body = "\n---\n".join(sections)
    return f"""# TruffleHog Scan Results

Found {len(findings)} secret(s):
{body}
"""


def format_verification(findings: list[Finding], detector_type: str) -> str:
    """Render the result of scanning a single secret with one detector."""
    if not findings:
        return f"""# Verification Result

No matching secrets found for detector type: {detector_type}

This could mean:
- The secret format doesn't match the expected pattern
- The detector type is incorrect
- The secret is not recognized by TruffleHog
"""

    finding = findings[0]
    if finding.verified:
        status = "YES - Secret is ACTIVE"
        advice = "**WARNING**: This secret is active and should be rotated immediately!"
    else:
        status = "NO - Could not verify"
        advice = (
            "The secret could not be verified. It may be inactive or the "
            "verification endpoint was unreachable."
        )

    return f"""# Verification Result

- **Detector**: {finding.detector_name}
- **Verified**: {status}
- **Redacted**: {finding.redacted}

{advice}
"""
