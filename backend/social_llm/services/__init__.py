from social_llm.services.background import BackgroundLoop
from social_llm.services.dedup import ProcessedSet
from social_llm.services.interceptor import EventInterceptor
from social_llm.services.notifications import NotificationLog, NotificationSink
from social_llm.services.play_log import PlayLog

__all__ = [
    "BackgroundLoop",
    "EventInterceptor",
    "NotificationLog",
    "NotificationSink",
    "PlayLog",
    "ProcessedSet",
]
