"""
The MODEL layer contains pure data structures and the mapping logic.
It has NO knowledge of the GUI (Qt) or the network.
It deals with Directions, the Map Graph, and I/O.
"""
