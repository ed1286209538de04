"""
Guest-facing forms using Flask-WTF.
Availability search and reservation details, with CSRF protection.
"""

from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import DataRequired, Email, Length, Optional, ValidationError

from utils.messages import MESSAGES
from utils.validators import validate_phone as is_valid_phone


class SearchAvailabilityForm(FlaskForm):
    """Arrival and departure dates (YYYY-MM-DD)."""

    start = StringField('Arrival', validators=[
        DataRequired(message='Arrival date is required')
    ])

    end = StringField('Departure', validators=[
        DataRequired(message='Departure date is required')
    ])


class ReservationForm(FlaskForm):
    """Guest details for a reservation."""

    first_name = StringField('First name', validators=[
        DataRequired(message='First name is required'),
        Length(min=3, message='First name must be at least 3 characters long')
    ])

    last_name = StringField('Last name', validators=[
        DataRequired(message='Last name is required')
    ])

    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message=MESSAGES['invalid_email'])
    ])

    phone = StringField('Phone', validators=[
        Optional(),
        Length(max=30)
    ])

    def validate_phone(self, field):
        if field.data and not is_valid_phone(field.data):
            raise ValidationError(MESSAGES['invalid_phone'])
