from __future__ import annotations

style_names : tuple[str, ...] = ('italic', 'bold', 'underline', 'strike')

class StyledLine:
    """
    A single display line of a subtitle, with independent italic, bold, underline and strike flags
    """
    def __init__(self, text : str = "", italic : bool = False, bold : bool = False, underline : bool = False, strike : bool = False):
        self.text : str = text.replace('\r', '') if text else ""
        self.italic : bool = italic
        self.bold : bool = bold
        self.underline : bool = underline
        self.strike : bool = strike

    @property
    def styles(self) -> list[str]:
        """ Names of the active styles, always in the order italic, bold, underline, strike """
        return [ name for name in style_names if getattr(self, name) ]

    @property
    def is_styled(self) -> bool:
        return self.italic or self.bold or self.underline or self.strike

    def __eq__(self, other : object) -> bool:
        if not isinstance(other, StyledLine):
            return NotImplemented
        return (self.text, self.italic, self.bold, self.underline, self.strike) == (other.text, other.italic, other.bold, other.underline, other.strike)

    def __repr__(self) -> str:
        flags = ''.join(name[0] for name in self.styles)
        return f"StyledLine({self.text!r}{', ' + flags if flags else ''})"
