"""Top-level package for the shop dispatch simulator.

The simulator builds a weighted directed graph, computes single-source
shortest paths with tie counts (Dijkstra), and uses them to send every
client the nearest shops or taxis, printing the routes taken.
"""
