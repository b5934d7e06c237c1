"""Notification composition package.

Resolves a caller-built ``Notification`` into a finalized
``OutboundNotification``, renders every text/HTML field through Jinja2
templates, wraps the serialized result in a digested ``Message`` envelope
and POSTs it to an rqueue intake endpoint.
"""
