"""
Storefront Service Event Management
Initializes and manages Kafka event publishing for the storefront service.
"""

import socket
from typing import Optional, Tuple

from ..events.base.kafka_client import KafkaEventPublisher
from ..events.event_producers import InteractionEventProducer
from ..utils.logging import setup_storefront_logging as setup_logging
from .setting import get_settings

logger = setup_logging("storefront_service.events", log_level=get_settings().LOG_LEVEL)

# Global instances
_kafka_publisher: Optional[KafkaEventPublisher] = None
_interaction_event_producer: Optional[InteractionEventProducer] = None


def _split_host_port(server: str) -> Optional[Tuple[str, int]]:
    """'host:port' or '[v6addr]:port' into a (host, port) pair"""
    host, sep, port = server.strip().rpartition(":")
    if not sep or not host or not port.isdigit():
        return None
    return host.strip("[]"), int(port)


def kafka_reachable(bootstrap_servers: str, timeout: float = 1.0) -> bool:
    """Quick TCP probe; True as soon as one bootstrap server accepts"""
    for server in bootstrap_servers.split(","):
        address = _split_host_port(server)
        if address is None:
            continue
        try:
            with socket.create_connection(address, timeout=timeout):
                return True
        except OSError:
            continue
    return False


async def init_events() -> bool:
    """
    Initialize event publishing infrastructure.

    Returns True when the publisher is connected. When the broker cannot be
    reached the producer still exists and logs events instead of publishing.
    """
    global _kafka_publisher, _interaction_event_producer

    settings = get_settings()
    logger.info(
        "Initializing event publishing infrastructure",
        extra={
            "operation": "init_events",
            "kafka_servers": settings.KAFKA_BOOTSTRAP_SERVERS,
            "service_name": settings.SERVICE_NAME,
        },
    )

    _kafka_publisher = KafkaEventPublisher(
        bootstrap_servers=settings.KAFKA_BOOTSTRAP_SERVERS,
        client_id=f"{settings.SERVICE_NAME}-producer",
        max_retries=settings.KAFKA_CONNECT_RETRIES,
        retry_delay=settings.KAFKA_RETRY_DELAY,
        enable_graceful_degradation=True,
    )
    _interaction_event_producer = InteractionEventProducer(
        _kafka_publisher, topics=settings.kafka_topics
    )

    if not kafka_reachable(settings.KAFKA_BOOTSTRAP_SERVERS):
        logger.warning(
            "Kafka not reachable - operating in degraded mode",
            extra={"operation": "init_events", "degraded_mode": True},
        )
        return False

    try:
        await _kafka_publisher.start(timeout=30.0)
        if _kafka_publisher.is_connected:
            await _kafka_publisher.ensure_topics_exist(settings.kafka_topics.values())
    except Exception as e:
        logger.warning(
            "Event publishing initialization failed - operating in degraded mode",
            extra={
                "operation": "init_events_failed",
                "error": str(e),
                "degraded_mode": True,
            },
        )
        return False

    logger.info(
        "Event publishing infrastructure initialized",
        extra={
            "operation": "init_events_complete",
            "connected": _kafka_publisher.is_connected,
        },
    )
    return _kafka_publisher.is_connected


async def close_events() -> None:
    """Close event publishing infrastructure"""
    global _kafka_publisher, _interaction_event_producer

    try:
        if _kafka_publisher:
            logger.info(
                "Closing event publishing infrastructure",
                extra={"operation": "close_events"},
            )
            await _kafka_publisher.stop()
    except Exception as e:
        logger.error(
            "Error closing event infrastructure",
            extra={"operation": "close_events_error", "error": str(e)},
        )
    finally:
        _kafka_publisher = None
        _interaction_event_producer = None


def get_event_producer() -> Optional[InteractionEventProducer]:
    """Get the interaction event producer instance"""
    return _interaction_event_producer


async def health_check_events() -> bool:
    """Check if event publishing is healthy"""
    if _kafka_publisher:
        return await _kafka_publisher.health_check()
    return False
