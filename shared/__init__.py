"""Cross-app building blocks shared by the PawStay domain apps."""
