import asyncio
import json
from typing import Iterable, Optional

from aiokafka import AIOKafkaProducer  # type: ignore
from aiokafka.admin import AIOKafkaAdminClient, NewTopic  # type: ignore
from aiokafka.errors import KafkaConnectionError, KafkaError  # type: ignore

from ...core.setting import get_settings
from ...utils.logging import setup_storefront_logging as setup_logging
from . import BaseEvent, EventPublisher

logger = setup_logging(
    "storefront_service.events.kafka", log_level=get_settings().LOG_LEVEL
)


class KafkaEventPublisher(EventPublisher):
    """
    Storefront Kafka publisher with connection retry logic.

    With graceful degradation enabled, events that cannot be published are
    logged instead and the caller never sees a broker failure.
    """

    def __init__(
        self,
        bootstrap_servers: str,
        client_id: str,
        max_retries: int = 5,
        retry_delay: float = 2.0,
        enable_graceful_degradation: bool = True,
    ):
        self.bootstrap_servers = bootstrap_servers
        self.client_id = client_id
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.enable_graceful_degradation = enable_graceful_degradation
        self.producer: Optional[AIOKafkaProducer] = None
        self.is_connected = False
        self._connection_lock = asyncio.Lock()

    async def ensure_topics_exist(self, topic_names: Iterable[str]) -> None:
        """Create any of the given topics the cluster does not know yet."""
        admin_client = AIOKafkaAdminClient(bootstrap_servers=self.bootstrap_servers)
        await admin_client.start()  # type: ignore
        try:
            existing = set(await admin_client.list_topics())
            missing = [name for name in dict.fromkeys(topic_names) if name not in existing]
            if missing:
                await admin_client.create_topics(
                    [
                        NewTopic(name=name, num_partitions=1, replication_factor=1)
                        for name in missing
                    ]
                )
                logger.info(
                    "Created Kafka topics",
                    extra={"topics": missing, "operation": "create_topics"},
                )
        except Exception as e:
            logger.warning(
                "Error ensuring Kafka topics exist",
                extra={"error": str(e), "operation": "ensure_topics_exist"},
            )
        finally:
            await admin_client.close()  # type: ignore

    async def start(self, timeout: float = 30.0) -> None:
        """Start Kafka producer with retry logic"""
        async with self._connection_lock:
            if self.producer and self.is_connected:
                return

            self.producer = AIOKafkaProducer(
                bootstrap_servers=self.bootstrap_servers,
                client_id=self.client_id,
                value_serializer=lambda x: json.dumps(x, default=str).encode("utf-8"),  # type: ignore
                key_serializer=lambda x: x.encode("utf-8") if x else None,  # type: ignore
                retry_backoff_ms=1000,
                request_timeout_ms=30000,
            )

            # Retry connection with exponential backoff
            for attempt in range(self.max_retries):
                try:
                    logger.info(
                        "Attempting Kafka connection",
                        extra={
                            "attempt": attempt + 1,
                            "max_retries": self.max_retries,
                            "operation": "kafka_connect",
                        },
                    )
                    await asyncio.wait_for(self.producer.start(), timeout=timeout)  # type: ignore

                    self.is_connected = True
                    logger.info("Successfully connected to Kafka")
                    return

                except (KafkaConnectionError, asyncio.TimeoutError) as e:
                    delay = self.retry_delay * (2**attempt)
                    logger.warning(
                        f"Kafka connection attempt {attempt + 1} failed: {e}. "
                        f"Retrying in {delay} seconds..."
                    )

                    if attempt < self.max_retries - 1:
                        await asyncio.sleep(delay)

            logger.error(
                f"Failed to connect to Kafka after {self.max_retries} attempts. "
                f"Running in degraded mode (events will be logged but not published)"
            )
            self.is_connected = False
            if not self.enable_graceful_degradation:
                raise KafkaConnectionError(
                    f"Could not connect to Kafka at {self.bootstrap_servers}"
                )

    async def stop(self) -> None:
        """Stop Kafka producer, flushing anything still buffered"""
        async with self._connection_lock:
            if self.producer:
                try:
                    await self.producer.stop()  # type: ignore
                    logger.info("Kafka producer stopped")
                except Exception as e:
                    logger.warning(
                        "Error stopping Kafka producer",
                        extra={"error": str(e), "operation": "stop_producer"},
                    )
                finally:
                    self.producer = None
                    self.is_connected = False

    async def publish(self, event: BaseEvent, topic: str, wait: bool = True) -> None:
        """
        Publish an event to a topic.

        With `wait=False` the record is handed to the producer buffer and the
        call returns without waiting for the broker acknowledgement; delivery
        failures are only logged.
        """
        if not self.is_connected or not self.producer:
            if self.enable_graceful_degradation:
                logger.warning(
                    f"Kafka not available, logging event instead: {event.event_type}",
                    extra={
                        "event_id": event.event_id,
                        "topic": topic,
                        "event_data": event.model_dump(mode="json"),
                    },
                )
                return
            raise KafkaConnectionError("Kafka producer not connected")

        value = event.model_dump(mode="json")
        try:
            if wait:
                await self.producer.send_and_wait(  # type: ignore
                    topic=topic, value=value, key=event.correlation_id
                )
            else:
                delivery = await self.producer.send(  # type: ignore
                    topic=topic, value=value, key=event.correlation_id
                )
                delivery.add_done_callback(
                    lambda fut: self._log_delivery_failure(fut, event, topic)
                )
            logger.debug(
                "Published event to Kafka topic",
                extra={
                    "event_type": event.event_type,
                    "topic": topic,
                    "event_id": event.event_id,
                    "correlation_id": event.correlation_id,
                    "acknowledged": wait,
                    "operation": "publish_event",
                },
            )

        except KafkaError as e:
            if not self.enable_graceful_degradation:
                logger.error(
                    "Failed to publish event to Kafka",
                    extra={
                        "event_type": event.event_type,
                        "topic": topic,
                        "error": str(e),
                        "event_id": event.event_id,
                        "operation": "publish_event_failed",
                    },
                )
                raise
            logger.error(
                f"Failed to publish event {event.event_type}, logging instead: {e}",
                extra={"event_id": event.event_id, "topic": topic, "event_data": value},
            )

    @staticmethod
    def _log_delivery_failure(
        delivery: "asyncio.Future[object]", event: BaseEvent, topic: str
    ) -> None:
        if delivery.cancelled():
            return
        error = delivery.exception()
        if error is not None:
            logger.error(
                "Kafka delivery failed",
                extra={
                    "event_id": event.event_id,
                    "event_type": event.event_type,
                    "topic": topic,
                    "error": str(error),
                    "operation": "delivery_failed",
                },
            )

    async def health_check(self) -> bool:
        """Check if Kafka connection is healthy"""
        try:
            if not self.producer or not self.is_connected:
                return False

            metadata = await self.producer.client.fetch_all_metadata()  # type: ignore
            return len(metadata.brokers()) > 0  # type: ignore

        except Exception as e:
            logger.warning(
                "Kafka health check failed",
                extra={"error": str(e), "operation": "health_check"},
            )
            return False
