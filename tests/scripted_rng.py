class ScriptedRng:
    """Replays queued values, then falls back to fixed defaults."""

    def __init__(self, rolls=(), choices=(), ints=(), default_roll=0.99):
        self.rolls = list(rolls)
        self.choices = list(choices)
        self.ints = list(ints)
        self.default_roll = default_roll

    def random(self):
        return self.rolls.pop(0) if self.rolls else self.default_roll

    def choice(self, seq):
        return seq[self.choices.pop(0) if self.choices else 0]

    def randint(self, a, b):
        return self.ints.pop(0) if self.ints else a
