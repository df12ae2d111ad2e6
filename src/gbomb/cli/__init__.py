"""Giant Bomb CLI module.

Usage:
    python -m gbomb.cli videos --pages 2
    python -m gbomb.cli game 3030-56733
    python -m gbomb.cli search Bangai-O
    python -m gbomb.cli podcasts bombcast
    python -m gbomb.cli download URL --output video.mp4
"""
