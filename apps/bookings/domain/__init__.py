"""Framework-free booking rules: availability over intervals, actor roles and transitions."""
