# -*- coding: utf-8 -*-
"""
taskhub/api/v1/users/crud/__init__.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
CRUD операции для пользователей.
"""
