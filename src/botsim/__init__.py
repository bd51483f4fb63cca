"""
botsim: Bot-Network Propagation Simulator

A simulator of a factory of bots handing chips to each other.

Core concepts:
- A bot holds at most two chips
- A bot's rule says where its lower and higher chip go
- A bot fires once it has two chips AND a rule, whichever comes last
- Firing can make other bots fire, recursively, until nothing can move
- Chips that leave the network land in numbered output bins

See DESIGN.md for full details.
"""

__version__ = "0.1.0"
