"""
Events module for the Storefront Service.

Producers:
    - InteractionEventProducer: page hits, clicks, impressions, cart events

The storefront only publishes; nothing in this service consumes the topics.
"""

from .event_producers import InteractionEventProducer

__all__ = ["InteractionEventProducer"]
