"""Rock-paper-scissors against the house ("Feria").

The house is biased: any round that is not a tie goes to the computer with
probability HOUSE_WIN_PROBABILITY, regardless of the usual rules. A match
lasts ATTEMPTS_PER_MATCH rounds.
"""
import random
from enum import Enum
from uuid import uuid4

ATTEMPTS_PER_MATCH = 5
HOUSE_WIN_PROBABILITY = 0.65


class Choice(str, Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"


class RoundWinner(str, Enum):
    PLAYER = "player"
    COMPUTER = "computer"
    TIE = "tie"


class MatchOverError(Exception):
    """Raised when a round is played on a finished match."""


def decide_winner(player: Choice, computer: Choice, rng: random.Random) -> RoundWinner:
    if player == computer:
        return RoundWinner.TIE
    if rng.random() < HOUSE_WIN_PROBABILITY:
        return RoundWinner.COMPUTER
    return RoundWinner.PLAYER


class Match:
    """One five-round match. Mutated in place by play()."""

    def __init__(self, match_id: str | None = None, attempts: int = ATTEMPTS_PER_MATCH):
        self.id = match_id or str(uuid4())
        self.player_score = 0
        self.computer_score = 0
        self.attempts_left = attempts
        self.rounds: list[dict] = []

    @property
    def game_over(self) -> bool:
        return self.attempts_left <= 0

    @property
    def outcome(self) -> RoundWinner | None:
        if not self.game_over:
            return None
        if self.player_score > self.computer_score:
            return RoundWinner.PLAYER
        if self.computer_score > self.player_score:
            return RoundWinner.COMPUTER
        return RoundWinner.TIE

    def play(self, choice: Choice, rng: random.Random) -> dict:
        if self.game_over:
            raise MatchOverError(f"Match {self.id} is already over.")

        computer = rng.choice(list(Choice))
        winner = decide_winner(choice, computer, rng)
        if winner == RoundWinner.PLAYER:
            self.player_score += 1
        elif winner == RoundWinner.COMPUTER:
            self.computer_score += 1
        self.attempts_left -= 1

        result = {
            "player_choice": choice.value,
            "computer_choice": computer.value,
            "winner": winner.value,
        }
        self.rounds.append(result)
        return result

    def to_dict(self) -> dict:
        outcome = self.outcome
        return {
            "match_id": self.id,
            "player_score": self.player_score,
            "computer_score": self.computer_score,
            "attempts_left": self.attempts_left,
            "game_over": self.game_over,
            "outcome": outcome.value if outcome else None,
            "rounds": list(self.rounds),
        }
