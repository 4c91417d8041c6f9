from enum import StrEnum

class PlayerType(StrEnum):
    HUMAN = "human"
    COMPUTER = "computer"

class Difficulty(StrEnum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"
