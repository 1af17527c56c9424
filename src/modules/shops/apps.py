from django.apps import AppConfig


class ShopsConfig(AppConfig):
    name = "modules.shops"
    label = "shops"
