"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from visual_dictionary.adapters.dictionary_api_client import HttpxDictionaryApiClient
from visual_dictionary.adapters.openai_speech_client import OpenAISpeechClient
from visual_dictionary.adapters.openai_vision_client import OpenAIVisionClient
from visual_dictionary.adapters.supabase_auth_provider import SupabaseAuthProvider
from visual_dictionary.adapters.supabase_image_analysis_repository import (
    SupabaseImageAnalysisRepository,
)
from visual_dictionary.adapters.supabase_image_storage import SupabaseImageStorage
from visual_dictionary.adapters.supabase_word_repository import SupabaseWordRepository
from visual_dictionary.config import Settings, parse_csv
from visual_dictionary.services.analysis import AnalysisService
from visual_dictionary.services.audio import AudioService
from visual_dictionary.services.auth import AuthService
from visual_dictionary.services.cache import InMemoryCache
from visual_dictionary.services.dictionary import DictionaryService
from visual_dictionary.services.word_lookup import WordLookupService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    analysis_service: AnalysisService
    audio_service: AudioService
    dictionary_service: DictionaryService
    word_lookup_service: WordLookupService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    service_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    auth_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_anon_key
    )
    word_repository = SupabaseWordRepository(service_client)
    vision_client = OpenAIVisionClient.create(resolved_settings.openai_api_key)
    speech_client = OpenAISpeechClient.create(resolved_settings.openai_api_key)
    analysis_service = AnalysisService(
        vision_client=vision_client,
        storage=SupabaseImageStorage(
            client=service_client, bucket=resolved_settings.storage_bucket
        ),
        word_repository=word_repository,
        image_analysis_repository=SupabaseImageAnalysisRepository(service_client),
        model=resolved_settings.openai_vision_model,
        max_output_tokens=resolved_settings.openai_max_output_tokens,
    )
    audio_service = AudioService(
        client=speech_client,
        model=resolved_settings.openai_tts_model,
        voice=resolved_settings.openai_tts_voice,
        formats=parse_csv(resolved_settings.tts_response_formats) or ("mp3",),
    )
    dictionary_client = HttpxDictionaryApiClient.create(
        resolved_settings.dictionary_api_base_url
    )
    word_lookup_service = WordLookupService(
        client=dictionary_client,
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.dictionary_cache_ttl_seconds,
    )
    auth_service = AuthService(
        SupabaseAuthProvider(client=auth_client, admin_client=service_client)
    )

    async def close_resources() -> None:
        await dictionary_client.close()
        await vision_client.client.close()
        await speech_client.client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        analysis_service=analysis_service,
        audio_service=audio_service,
        dictionary_service=DictionaryService(word_repository),
        word_lookup_service=word_lookup_service,
        close_resources=close_resources,
    )
