"""Graph layer for trafficsplit.

Contains the base road network, the closure overlay and the path search
adapter built on networkx.
"""
