from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from booksphere.application.mood.use_cases.mood_rule_store_use_case import MoodRuleStoreUseCase
from booksphere.application.mood.use_cases.reader_preferences_use_case import (
    ReaderPreferencesUseCase,
)
from booksphere.application.mood.use_cases.resolve_mood_trigger_use_case import (
    ResolveMoodTriggerUseCase,
)
from booksphere.application.realtime.session_registry import SessionRegistry
from booksphere.application.sync.services.delta_sync_reconciler import DeltaSyncReconciler
from booksphere.config import get_settings
from booksphere.database import default_session_factory
from booksphere.domain.mood.services.mood_resolver import MoodResolver
from booksphere.domain.mood.services.trigger_rule_selector import TriggerRuleSelector
from booksphere.infrastructure.files.signed_url_service import SignedUrlService
from booksphere.infrastructure.identity.repositories.user_profile_repository import (
    UserProfileRepository,
)
from booksphere.infrastructure.mood.repositories import (
    MoodMapRepository,
    MoodReferenceRepository,
    PresetRepository,
    TriggerRuleRepository,
)
from booksphere.infrastructure.realtime.dispatcher import MessageDispatcher
from booksphere.infrastructure.realtime.gateways import MoodGateway, ReaderProfileGateway
from booksphere.infrastructure.sync.repositories import AuditLogRepository, InMemorySyncEventStore


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    settings = providers.Callable(get_settings)

    # Session factory for code that outlives a request (websocket handlers, audit writes)
    session_factory = providers.Callable(default_session_factory)

    # Repositories
    preset_repository = providers.Factory(PresetRepository, db=db)
    trigger_rule_repository = providers.Factory(TriggerRuleRepository, db=db)
    mood_map_repository = providers.Factory(MoodMapRepository, db=db)
    mood_reference_repository = providers.Factory(MoodReferenceRepository, db=db)
    user_profile_repository = providers.Factory(UserProfileRepository, db=db)

    # Domain services (pure domain logic, no db)
    mood_resolver = providers.Factory(
        MoodResolver, clamp_output_tempo=settings.provided.CLAMP_OUTPUT_TEMPO
    )
    trigger_rule_selector = providers.Factory(TriggerRuleSelector)

    # Mood module, application use cases
    resolve_mood_trigger_use_case = providers.Factory(
        ResolveMoodTriggerUseCase,
        mood_map_repository=mood_map_repository,
        mood_reference_repository=mood_reference_repository,
        mood_resolver=mood_resolver,
    )
    mood_rule_store_use_case = providers.Factory(
        MoodRuleStoreUseCase,
        trigger_rule_repository=trigger_rule_repository,
        preset_repository=preset_repository,
        trigger_rule_selector=trigger_rule_selector,
    )
    reader_preferences_use_case = providers.Factory(
        ReaderPreferencesUseCase,
        user_repository=user_profile_repository,
    )

    # Sync module (process-wide state)
    audit_trail = providers.Singleton(AuditLogRepository, session_factory=session_factory)
    sync_event_store = providers.Singleton(
        InMemorySyncEventStore, capacity=settings.provided.SYNC_BUFFER_CAPACITY
    )
    delta_sync_reconciler = providers.Singleton(
        DeltaSyncReconciler,
        store=sync_event_store,
        audit_trail=audit_trail,
    )

    # Realtime module
    session_registry = providers.Singleton(SessionRegistry)
    signed_url_service = providers.Singleton(SignedUrlService)
    reader_profile_gateway = providers.Singleton(
        ReaderProfileGateway, session_factory=session_factory
    )
    mood_gateway = providers.Singleton(
        MoodGateway, session_factory=session_factory, mood_resolver=mood_resolver
    )
    message_dispatcher = providers.Singleton(
        MessageDispatcher,
        registry=session_registry,
        reconciler=delta_sync_reconciler,
        profiles=reader_profile_gateway,
        moods=mood_gateway,
        url_signer=signed_url_service,
        audit_trail=audit_trail,
        default_genre=settings.provided.DEFAULT_MUSIC_GENRE,
        default_sensitivity=settings.provided.DEFAULT_MOOD_SENSITIVITY,
        auto_leave_previous_room=settings.provided.AUTO_LEAVE_PREVIOUS_ROOM,
    )


# Initialize container
container = Container()
