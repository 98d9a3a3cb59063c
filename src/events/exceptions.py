class WebhookHandlingError(Exception):
    """A Stripe event could not be turned into a registration."""


class EventFullError(Exception):
    """Not enough tickets left for the requested amount."""

    def __init__(self, requested: int, remaining: int) -> None:
        self.requested = requested
        self.remaining = remaining
        super().__init__(f"Requested {requested} tickets, {remaining} remaining")
