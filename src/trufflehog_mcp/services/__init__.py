"""
Service Layer - ScanService and ScanReport.
"""

from trufflehog_mcp.services.scan_service import ScanReport, ScanService

__all__ = [
    "ScanReport",
    "ScanService",
]
