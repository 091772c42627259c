"""Users app: accounts, tutor and host profiles, host subscriptions."""
