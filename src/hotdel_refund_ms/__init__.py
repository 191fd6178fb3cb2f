"""Hot-Del refund microservice: order cancellation, refunds and mock payments."""
