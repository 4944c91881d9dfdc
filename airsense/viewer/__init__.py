"""
AirSense viewer.

DOM-free implementation of the map viewer: an API client, an immutable view
state, the pure transitions of the filter cascade, the controller that drives
them from user input and network completions, and renderers for the panel
and the folium map.
"""
