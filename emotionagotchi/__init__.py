"""Emotionagotchi: a creature that brightens when feelings are expressed.

Re-exports the public surface so callers can `from emotionagotchi import Session`.
"""

from .backends import (  # noqa: F401
    FileBackend,
    KeyValueBackend,
    MemoryBackend,
    StorageError,
    StorageQuotaError,
)

from .config import (  # noqa: F401
    Settings,
    create_session,
    load_settings,
)

from .creature import (  # noqa: F401
    clamp,
    initial_state,
    transition,
)

from .history import (  # noqa: F401
    format_timestamp,
    newest_first,
)

from .models import (  # noqa: F401
    Action,
    Animation,
    CreatureState,
    EmotionLog,
    SaveResult,
)

from .session import (  # noqa: F401
    Session,
    SessionNotReadyError,
)

from .storage import (  # noqa: F401
    CREATURE_KEY,
    LOGS_KEY,
    SAFETY_KEY,
    Storage,
)
