"""Desktop host: screen flow, input mapping, overlays and the pygame window."""
