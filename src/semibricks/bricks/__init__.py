"""Type descriptors, one class per schema shape."""
