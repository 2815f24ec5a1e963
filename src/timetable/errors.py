"""Error hierarchy for the timetable engine.

The engine itself is a pure transform over already-loaded data, so almost
nothing here is raised from the core. Malformed schedule data is downgraded to
"no class that day" and logged; only caller mistakes (bad configuration) and
the roster-loading boundary raise.

Example:
    try:
        snapshot = load_roster("data/roster.json")
    except RosterLoadError as exc:
        log.error("roster_unavailable", error=str(exc))
"""


class TimetableError(Exception):
    """Base exception for all timetable errors."""

    pass


class InvalidTimeError(TimetableError, ValueError):
    """A time string is not a valid 24-hour ``HH:MM`` value.

    Subclasses ValueError so pydantic validators turn it into a regular
    validation failure.
    """

    pass


class ConfigurationError(TimetableError):
    """The caller supplied an unusable setting.

    Examples: a negative unit threshold, an unknown credit policy, an empty
    color palette.
    """

    pass


class RosterLoadError(TimetableError):
    """The roster snapshot could not be read.

    Examples: missing file, invalid JSON, top-level value that is neither a
    list of students nor a ``{"students": [...]}`` document.
    """

    pass
