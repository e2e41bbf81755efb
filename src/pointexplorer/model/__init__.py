"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of the GUI (Qt) or of plotting (matplotlib).
It deals with values, point records, the grid, session state and I/O.
"""
