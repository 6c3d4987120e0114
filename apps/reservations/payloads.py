"""
JSON shapes for slot grids and reservations, shared by the client views and
the admin/operator dashboard.
"""


def _hhmm(t):
    return t.strftime('%H:%M') if t else None


def overview_payload(overview) -> list:
    return [
        {
            'date':     day.date.isoformat(),
            'weekday':  day.weekday,
            'bookable': day.bookable,
            'slots': [
                {
                    'date':      slot.date.isoformat(),
                    'startTime': _hhmm(slot.start_time),
                    'endTime':   _hhmm(slot.end_time),
                    'status':    str(slot.status),
                }
                for slot in day.slots
            ],
        }
        for day in overview
    ]


def reservation_payload(reservation, include_owner: bool = False) -> dict:
    data = {
        'id':                str(reservation.id),
        'reservation_no':    reservation.reservation_no,
        'date':              reservation.date.isoformat(),
        'start_time':        _hhmm(reservation.start_time),
        'end_time':          _hhmm(reservation.end_time),
        'status':            reservation.status,
        'container_no':      reservation.container_no,
        'packing_list_path': reservation.packing_list_path,
        'cancel_reason':     reservation.cancel_reason,
        'created_at':        reservation.created_at.isoformat(),
        'cancelled_at':      reservation.cancelled_at.isoformat() if reservation.cancelled_at else None,
    }
    if include_owner:
        user = reservation.user
        data.update({
            'user_id':      user.id,
            'display_name': user.display_name,
            'company_name': user.company_name,
            'phone':        user.phone,
        })
    return data
