"""Random CPU opponent.

Bound by the host: ``game``, ``log``, ``board_json``, ``legal_moves_json``.
Prefers a random legal move when the game supplies them, otherwise places a
stone on a random empty field.
"""

import json
import random

log("Loading CPU script 'random_cpu' with player ID %d" % game.get_id())


def make_move(possible_move_count):
    legal_moves = json.loads(legal_moves_json)
    if legal_moves:
        return random.choice(legal_moves)

    board = json.loads(board_json)
    empty = [i for i, cell in enumerate(board) if cell == ""]
    if not empty:
        log("No empty field left (%d possible moves)" % possible_move_count)
        return []
    return [-1, 1, random.choice(empty)]
