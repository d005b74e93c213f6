"""Loading of weslBundle descriptors from generated bundle files."""
