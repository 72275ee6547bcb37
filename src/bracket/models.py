TBD = 'TBD'
BYE = 'BYE'
SENTINELS = (TBD, BYE)

SCHEDULED = 'scheduled'
COMPLETED = 'completed'

TEAM1 = 'team1'
TEAM2 = 'team2'
WINNER_KEYS = (TEAM1, TEAM2)

# Fields a caller may change through MatchStore.update_match()
MUTABLE_FIELDS = ('team1_name', 'team2_name', 'score1', 'score2', 'winner_name', 'status')


def is_real_team(name) -> bool:
    """A slot value that names an actual entrant."""
    return bool(name) and name not in SENTINELS


class Match:
    def __init__(self, identifier, round_index, match_index, round_name,
                 team1_name=TBD, team2_name=TBD, score1=0, score2=0,
                 winner_name=None, status=SCHEDULED, next_match_identifier=None):
        self.identifier = identifier
        self.round_index = round_index
        self.match_index = match_index
        self.round_name = round_name
        self.team1_name = team1_name
        self.team2_name = team2_name
        self.score1 = score1
        self.score2 = score2
        self.winner_name = winner_name
        self.status = status
        self.next_match_identifier = next_match_identifier  # None for the final

    @property
    def is_completed(self) -> bool:
        return self.status == COMPLETED

    @property
    def is_bye(self) -> bool:
        return BYE in (self.team1_name, self.team2_name)

    def team_name(self, key: str) -> str:
        if key == TEAM1:
            return self.team1_name
        if key == TEAM2:
            return self.team2_name
        raise KeyError(key)

    def winner_key(self):
        """Return 'team1'/'team2' for the recorded winner, or None."""
        if not self.winner_name:
            return None
        if self.winner_name == self.team1_name:
            return TEAM1
        if self.winner_name == self.team2_name:
            return TEAM2
        return None

    def to_dict(self) -> dict:
        return {
            'identifier': self.identifier,
            'round_index': self.round_index,
            'match_index': self.match_index,
            'round_name': self.round_name,
            'team1_name': self.team1_name,
            'team2_name': self.team2_name,
            'score1': self.score1,
            'score2': self.score2,
            'winner_name': self.winner_name,
            'status': self.status,
            'next_match_identifier': self.next_match_identifier,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Match':
        return cls(
            identifier=data['identifier'],
            round_index=int(data['round_index']),
            match_index=int(data['match_index']),
            round_name=data.get('round_name', ''),
            team1_name=data.get('team1_name') or TBD,
            team2_name=data.get('team2_name') or TBD,
            score1=int(data.get('score1') or 0),
            score2=int(data.get('score2') or 0),
            winner_name=data.get('winner_name'),
            status=data.get('status', SCHEDULED),
            next_match_identifier=data.get('next_match_identifier'),
        )

    def __eq__(self, other):
        if not isinstance(other, Match):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (f"Match(identifier={self.identifier}, team1={self.team1_name}, "
                f"team2={self.team2_name}, winner={self.winner_name}, status={self.status})")
