"""Application services."""

from ghbackup.services.backup import BackupError, BackupService, BackupSummary

__all__ = ["BackupError", "BackupService", "BackupSummary"]
