'''
Print job settings with the defaults the printing service expects.
'''
import random
import string
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field

PrintMode = Literal["document", "photo"]
MediaSize = Literal[
    "ms_a3", "ms_a4", "ms_a5", "ms_a6", "ms_b5",
    "ms_tabloid", "ms_letter", "ms_legal", "ms_halfletter",
    "ms_kg", "ms_l", "ms_2l", "ms_10x12", "ms_8x10",
    "ms_hivision", "ms_5x8", "ms_postcard",
]
MediaType = Literal["mt_plainpaper", "mt_photopaper", "mt_hagaki",
                    "mt_hagakiphoto", "mt_hagakiinkjet"]
PrintQuality = Literal["high", "normal", "draft"]
PaperSource = Literal["auto", "rear", "front1", "front2", "front3", "front4"]
ColorMode = Literal["color", "mono"]
TwoSided = Literal["none", "long", "short"]


def random_job_name(length: int = 8) -> str:
    return "job-" + "".join(random.choices(string.ascii_letters, k=length))


class PrintSetting(BaseModel):
    model_config = ConfigDict(extra="forbid")

    media_size: MediaSize = "ms_a4"
    media_type: MediaType = "mt_plainpaper"
    borderless: bool = False
    print_quality: PrintQuality = "normal"
    source: PaperSource = "auto"
    color_mode: ColorMode = "color"
    two_sided: TwoSided = "none"
    reverse_order: bool = False
    copies: int = Field(default=1, ge=1, le=99)
    collate: bool = True


class PrintSettings(BaseModel):
    '''
    Settings submitted when creating a print job.
    Every field left out is filled with its default.
    '''
    model_config = ConfigDict(extra="forbid")

    job_name: str = Field(default_factory=random_job_name, max_length=256)
    print_mode: PrintMode = "document"
    print_setting: PrintSetting = Field(default_factory=PrintSetting)
