class Team:
    def __init__(self, id, team_name, player1_pseudo, player2_pseudo,
                 player1_email=None, player2_email=None,
                 player1_whatsapp=None, player2_whatsapp=None,
                 paid=False, created_at=None):
        self.id = id
        self.team_name = team_name
        self.player1_pseudo = player1_pseudo
        self.player2_pseudo = player2_pseudo
        self.player1_email = player1_email
        self.player2_email = player2_email
        self.player1_whatsapp = player1_whatsapp
        self.player2_whatsapp = player2_whatsapp
        self.paid = paid
        self.created_at = created_at

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            team_name=data['team_name'],
            player1_pseudo=data.get('player1_pseudo'),
            player2_pseudo=data.get('player2_pseudo'),
            player1_email=data.get('player1_email'),
            player2_email=data.get('player2_email'),
            player1_whatsapp=data.get('player1_whatsapp'),
            player2_whatsapp=data.get('player2_whatsapp'),
            paid=bool(data.get('paid', False)),
            created_at=data.get('created_at'),
        )

    def to_dict(self):
        return {
            'id': self.id,
            'team_name': self.team_name,
            'player1_pseudo': self.player1_pseudo,
            'player2_pseudo': self.player2_pseudo,
            'player1_email': self.player1_email,
            'player2_email': self.player2_email,
            'player1_whatsapp': self.player1_whatsapp,
            'player2_whatsapp': self.player2_whatsapp,
            'paid': self.paid,
            'created_at': self.created_at,
        }

    def to_public_dict(self):
        """Team fields safe to show on the public bracket page (no contact details)."""
        return {
            'id': self.id,
            'team_name': self.team_name,
            'player1_pseudo': self.player1_pseudo,
            'player2_pseudo': self.player2_pseudo,
            'paid': self.paid,
            'created_at': self.created_at,
        }

    def __eq__(self, other):
        if not isinstance(other, Team):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f"Team(id={self.id}, team_name={self.team_name})"
