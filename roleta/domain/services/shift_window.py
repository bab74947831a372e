"""
JANELA DE TURNO
================

Intervalo de horário de um turno (hora_inicio → hora_fim).

Regras:
- Início inclusivo, fim exclusivo: [inicio, fim)
- Turno que vira a noite (ex: 22:00 → 06:00) contém tanto 23:00 quanto 05:59
- inicio == fim é tratado como turno de 24h
"""

from dataclasses import dataclass
from datetime import time
from typing import Optional


def parse_time(time_str: str) -> Optional[time]:
    """
    Converte string "HH:MM" (ou "HH:MM:SS") para objeto time.
    Retorna None se inválido.
    """
    if not time_str or not isinstance(time_str, str):
        return None

    try:
        parts = time_str.strip().split(":")
        if len(parts) >= 2:
            hour = int(parts[0])
            minute = int(parts[1])
            second = int(parts[2]) if len(parts) > 2 else 0
            return time(hour, minute, second)
    except (ValueError, IndexError):
        pass

    return None


@dataclass(frozen=True)
class ShiftWindow:
    """Janela [start, end) de um turno, com suporte a virada de meia-noite."""

    start: time
    end: time

    @classmethod
    def parse(cls, start: str, end: str) -> "ShiftWindow":
        start_time = parse_time(start)
        end_time = parse_time(end)
        if start_time is None or end_time is None:
            raise ValueError(f"Horário inválido: {start!r} - {end!r}")
        return cls(start_time, end_time)

    @property
    def crosses_midnight(self) -> bool:
        return self.start > self.end

    @property
    def is_full_day(self) -> bool:
        return self.start == self.end

    def contains(self, moment: time) -> bool:
        # Compara só o relógio; tzinfo do time é ignorado
        moment = moment.replace(tzinfo=None)

        if self.is_full_day:
            return True

        if self.crosses_midnight:
            return moment >= self.start or moment < self.end

        return self.start <= moment < self.end

    def __str__(self) -> str:
        return f"{self.start:%H:%M}-{self.end:%H:%M}"
