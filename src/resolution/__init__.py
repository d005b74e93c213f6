"""Resolution of WESL module paths to npm package files."""
