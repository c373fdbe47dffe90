# HTTP routes package
