# store/models/store.py

import uuid

from django.db import models


class Store(models.Model):
    """
    A branch store that takes in repair orders.

    Rules:
    - The password is only ever stored hashed (Django password hashers)
    - A store with orders cannot be deleted (orders.store is PROTECT)
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255)
    password_hash = models.CharField(max_length=128)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self):
        return self.name
