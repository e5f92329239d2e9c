"""Protein tracker core library: day-state engine and statistics.

Public API re-exports for convenient imports:
    from tracker import toggle_drank, get_stats, reconcile_and_persist, ...
"""

# Workspace & paths
from tracker.workspace import (
    workspace_root,
    configure_logging,
    get_user_timezone,
    now_local,
    load_profile,
    save_profile,
    state_path,
    profile_path,
    exports_dir,
)

# Clock
from tracker.clock import (
    app_date,
    date_key,
    today_key,
    previous_key,
    next_key,
)

# Storage
from tracker.store import (
    MAX_HISTORY,
    read_record,
    load_record,
    write_record,
    save_record,
)

# Reconciliation
from tracker.reconcile import (
    reconcile,
    view,
    reconcile_and_persist,
)

# Operations
from tracker.tracker import (
    get_day_view,
    get_current_drank,
    get_history,
    set_drank,
    toggle_drank,
    get_stats,
    get_calendar,
)

# Statistics
from tracker.stats import (
    current_streak,
    longest_streak,
    weekly_count,
    monthly_count,
    completion_rate,
    compute_stats,
    month_calendar,
)

# Export
from tracker.export import (
    build_snapshot,
    export_snapshot,
    write_export,
)

# Preferences
from tracker.preferences import (
    Session,
    text,
    status_text,
    weekday_headers,
    month_title,
    load_session,
    save_session,
    next_language,
    next_theme,
)

# Errors
from tracker.errors import (
    TrackerError,
    StorageReadError,
    StorageWriteError,
    InvalidDateKeyError,
)

# Models
from tracker.models import (
    Profile,
    TrackerRecord,
    DayView,
    TrackerStats,
    CalendarDay,
    ExportSnapshot,
    parse_date_key,
    is_date_key,
)
