# apps/geoapp/tests/test_models.py
from django.core.exceptions import ValidationError
from django.test import TestCase

from apps.geoapp.models import Location


class LocationModelTest(TestCase):
    def setUp(self):
        self.location = Location.objects.create(
            name="Harbour Grill",
            address_line1="12 Quay Street",
            address_line2="Level 2",
            city="Auckland",
            postal_code="1010",
            latitude=-36.8436,
            longitude=174.7660,
        )

    def test_str(self):
        self.assertEqual(str(self.location), "Harbour Grill")

    def test_address_skips_blank_parts(self):
        self.assertEqual(self.location.address, "12 Quay Street, Level 2, Auckland, 1010")

        self.location.address_line2 = ""
        self.assertEqual(self.location.address, "12 Quay Street, Auckland, 1010")

    def test_coordinates(self):
        self.assertEqual(self.location.coordinates, (-36.8436, 174.7660))

    def test_coordinate_validation(self):
        self.location.latitude = 90.5
        with self.assertRaises(ValidationError) as cm:
            self.location.full_clean()
        self.assertIn("latitude", cm.exception.message_dict)

        self.location.latitude = 0
        self.location.longitude = float("nan")
        with self.assertRaises(ValidationError) as cm:
            self.location.full_clean()
        self.assertIn("longitude", cm.exception.message_dict)
