"""Resources (styles) for DepGraph."""
