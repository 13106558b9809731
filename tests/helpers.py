from datetime import time

EMPTY = ["", ""]
WEEK = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


def flat(**days):
    # flat(mon=("08:00", "09:00")) -> 14 strings, Monday first
    values = []
    for day in WEEK:
        values.extend(days.get(day, EMPTY))
    return values


def slots(**days):
    # slots(mon=(8, 0, 9, 0)) -> 7 optional (start, end) pairs
    out = []
    for day in WEEK:
        if day in days:
            h1, m1, h2, m2 = days[day]
            out.append((time(h1, m1), time(h2, m2)))
        else:
            out.append(None)
    return out
