# Only one event type changes anything. Everything else is acknowledged with 200
# so Stripe does not keep redelivering it.
CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"

# user_profiles.paying_status written on a completed checkout
PAYING_STATUS_DONATED = "donated"
