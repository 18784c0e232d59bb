"""
Error logging utility for notification system.

Writes one timestamped report file per failure (persisting, delivery, sync)
so individual recipient failures can be inspected after a dispatch.
"""

import os
from datetime import datetime
from typing import Any

LOG_DIR = os.path.join(os.path.dirname(__file__), "logs")


def log_notification_error(
    error_type: str, error_message: str, context: dict[str, Any] | None = None
) -> str:
    """
    Log a notification error to a timestamped file.

    Args:
        error_type: Type of error (e.g., 'persisting', 'delivery', 'sync')
        error_message: The error message
        context: Optional dictionary with additional context (record_id, uid, etc.)

    Returns:
        Path to the log file created
    """
    os.makedirs(LOG_DIR, exist_ok=True)

    # Microseconds keep reports from several recipients in one second apart
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    filename = os.path.join(LOG_DIR, f"notification_{error_type}_{timestamp}.txt")

    with open(filename, "w", encoding="utf-8") as f:
        f.write(f"Notification Error Report - {datetime.now()}\n")
        f.write("=" * 60 + "\n\n")
        f.write(f"Error Type: {error_type}\n")
        f.write(f"Error Message: {error_message}\n")

        if context:
            f.write("\nContext:\n")
            f.write("-" * 60 + "\n")
            for key, value in context.items():
                f.write(f"{key}: {value}\n")

    return filename
