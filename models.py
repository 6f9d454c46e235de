"""
Data models and state representations.
"""

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional

from config import (
    DEFAULT_GAME_TYPE,
    DEFAULT_LETTERS_DURATION,
    DEFAULT_NUMBERS_DURATION,
    DEFAULT_PLAYER_NAMES,
    DEFAULT_ROUNDS,
    INITIATED,
)


@dataclass
class Player:
    id: str
    name: str
    score: int = 0                      # cumulative across completed rounds


@dataclass
class GameConfig:
    players: List[Player]               # seating order
    rounds: int = DEFAULT_ROUNDS
    game_type: str = DEFAULT_GAME_TYPE
    letters_duration: int = DEFAULT_LETTERS_DURATION
    numbers_duration: int = DEFAULT_NUMBERS_DURATION

    def player(self, player_id: str) -> Optional[Player]:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def clone(self) -> "GameConfig":
        return GameConfig(
            players=[Player(p.id, p.name, p.score) for p in self.players],
            rounds=self.rounds,
            game_type=self.game_type,
            letters_duration=self.letters_duration,
            numbers_duration=self.numbers_duration,
        )


def default_config() -> GameConfig:
    """The roster and settings a fresh setup form starts from."""
    players = [Player(id=str(i + 1), name=name) for i, name in enumerate(DEFAULT_PLAYER_NAMES)]
    return GameConfig(players=players)


@dataclass
class RoundContext:
    """Content generated for one round."""
    index: int
    type: str
    letter_pool: List[str] = field(default_factory=list)
    number_pool: List[int] = field(default_factory=list)
    target: Optional[int] = None


@dataclass
class NumberToken:
    id: str
    value: int


@dataclass
class WorkingSet:
    """Numbers available to the current player, plus their in-progress selection."""
    tokens: List[NumberToken] = field(default_factory=list)
    first: Optional[str] = None         # token id
    operator: Optional[str] = None
    second: Optional[str] = None        # token id
    log: List[str] = field(default_factory=list)
    last_result: Optional[int] = None
    next_id: int = 0

    def token(self, token_id: str) -> Optional[NumberToken]:
        for t in self.tokens:
            if t.id == token_id:
                return t
        return None

    def values(self) -> List[int]:
        return [t.value for t in self.tokens]

    def clone(self) -> "WorkingSet":
        return WorkingSet(
            tokens=[NumberToken(t.id, t.value) for t in self.tokens],
            first=self.first,
            operator=self.operator,
            second=self.second,
            log=self.log[:],
            last_result=self.last_result,
            next_id=self.next_id,
        )


@dataclass
class ActionResult:
    """Outcome of a player or host action. `error` holds the rejection kind."""
    ok: bool
    error: Optional[str] = None
    value: Optional[int] = None
    points: Optional[int] = None
    exact: bool = False


@dataclass
class GameState:
    config: Optional[GameConfig] = None
    round_index: int = 1
    round_type: Optional[str] = None
    round_state: str = INITIATED
    round: Optional[RoundContext] = None
    turn_order: List[str] = field(default_factory=list)   # player ids
    turn_index: int = 0
    round_scores: Dict[str, int] = field(default_factory=dict)
    answers: Dict[str, str] = field(default_factory=dict)
    work: WorkingSet = field(default_factory=WorkingSet)
    history: List[dict] = field(default_factory=list)
    game_over: bool = False
    timer_fired_round: Optional[int] = None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "GameState":
        """Rebuild a state from a snapshot, falling back to defaults for anything missing."""
        data = data or {}
        config = None
        raw_config = data.get("config")
        if isinstance(raw_config, dict) and raw_config.get("players"):
            config = GameConfig(
                players=[
                    Player(id=str(p.get("id")), name=p.get("name", ""), score=int(p.get("score", 0)))
                    for p in raw_config["players"]
                ],
                rounds=raw_config.get("rounds", DEFAULT_ROUNDS),
                game_type=raw_config.get("game_type", DEFAULT_GAME_TYPE),
                letters_duration=raw_config.get("letters_duration", DEFAULT_LETTERS_DURATION),
                numbers_duration=raw_config.get("numbers_duration", DEFAULT_NUMBERS_DURATION),
            )

        round_ctx = None
        raw_round = data.get("round")
        if raw_round:
            round_ctx = RoundContext(
                index=raw_round.get("index", 1),
                type=raw_round.get("type"),
                letter_pool=list(raw_round.get("letter_pool") or []),
                number_pool=list(raw_round.get("number_pool") or []),
                target=raw_round.get("target"),
            )

        raw_work = data.get("work") or {}
        work = WorkingSet(
            tokens=[
                NumberToken(t.get("id"), t.get("value"))
                for t in raw_work.get("tokens") or []
                if isinstance(t, dict) and "id" in t and "value" in t
            ],
            first=raw_work.get("first"),
            operator=raw_work.get("operator"),
            second=raw_work.get("second"),
            log=list(raw_work.get("log") or []),
            last_result=raw_work.get("last_result"),
            next_id=raw_work.get("next_id", 0),
        )

        return cls(
            config=config,
            round_index=data.get("round_index", 1),
            round_type=data.get("round_type"),
            round_state=data.get("round_state", INITIATED),
            round=round_ctx,
            turn_order=list(data.get("turn_order") or []),
            turn_index=data.get("turn_index", 0),
            round_scores=dict(data.get("round_scores") or {}),
            answers=dict(data.get("answers") or {}),
            work=work,
            history=list(data.get("history") or []),
            game_over=bool(data.get("game_over", False)),
            timer_fired_round=data.get("timer_fired_round"),
        )

    def clone(self) -> "GameState":
        return GameState.from_dict(self.to_dict())
