"""rqpush — compose, template and push notifications to an rqueue intake.

Typical use::

    from rqpush import Notification

    notification = Notification.init("Example", "An example", "Hello.")
    notification.set_category("example").set_url("http://example.com/")
    response = notification.send("http://localhost:8000", priority=55)
"""
from rqpush.notification.envelope import Message, OutboundNotification, generate_sha256
from rqpush.notification.errors import ConfigLoadError, RqpushError, TemplateRenderError
from rqpush.notification.notification import Notification

__version__ = "0.2.0"

__all__ = [
    "ConfigLoadError",
    "Message",
    "Notification",
    "OutboundNotification",
    "RqpushError",
    "TemplateRenderError",
    "generate_sha256",
]
