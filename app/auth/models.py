import enum
from dataclasses import dataclass, asdict
from typing import Optional


class UserType(enum.Enum):
    regular   = "regular"
    wholesale = "wholesale"


@dataclass(frozen=True)
class User:
    """A storefront shopper as returned by the backend (retail or wholesale)."""
    id:         str
    email:      str
    first_name: str
    last_name:  str
    phone:      str = ''
    address:    str = ''
    user_type:  str = UserType.regular.value

    # ── Convenience ───────────────────────────────────────────────
    @property
    def name(self) -> str:
        return f'{self.first_name} {self.last_name}'.strip()

    @property
    def is_wholesale(self) -> bool:
        return self.user_type == UserType.wholesale.value

    def to_dict(self) -> dict:
        data = asdict(self)
        data['name'] = self.name
        data['is_wholesale'] = self.is_wholesale
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'User':
        return cls(**{k: data[k] for k in cls.__dataclass_fields__ if k in data})

    @classmethod
    def from_backend(cls, record: dict) -> 'User':
        """
        Map the backend user record. Only user_type == "wholesale" is
        wholesale; "retail" or anything else is a regular account.
        """
        user_type = (UserType.wholesale if record.get('user_type') == 'wholesale'
                     else UserType.regular)
        return cls(
            id=str(record['id']),
            email=record.get('email', ''),
            first_name=record.get('first_name', ''),
            last_name=record.get('last_name', ''),
            phone=record.get('phone') or '',
            address=format_address(record.get('address')),
            user_type=user_type.value,
        )

    def __repr__(self) -> str:
        return f"<User {self.email!r} type={self.user_type!r}>"


# ── Address helpers ───────────────────────────────────────────────

def format_address(address: Optional[dict]) -> str:
    """Backend address record → "street, city, state, postal code"."""
    if not address:
        return ''
    parts = [address.get(k) or '' for k in ('street', 'city', 'state', 'postal_code')]
    return ', '.join(p for p in parts if p)


def parse_address(text: str, country: str) -> dict:
    """
    Free-text "street, city, state, postal code" → backend address record.
    Missing trailing components are left blank.
    """
    parts = [p.strip() for p in (text or '').split(',')]
    parts += [''] * (4 - len(parts))
    return {
        'street':      parts[0] or (text or '').strip(),
        'city':        parts[1],
        'state':       parts[2],
        'postal_code': parts[3],
        'country':     country,
        'is_default':  False,
    }
