import pytest

SAMPLE_CSV = """time,latitude,longitude,depth,mag,magType,nst,gap,dmin,rms,net,id,updated,place,type,horizontalError,depthError,magError,magNst,status,locationSource,magSource
2024-06-24T13:36:06.753Z,-21.9489,-179.5316,588.529,5.1,mb,93,49,4.76,0.74,us,us7000muc2,2024-06-24T14:01:12.040Z,"Fiji region",earthquake,10.66,6.404,0.024,559,reviewed,us,us
2024-06-24T09:55:02.164Z,-7.093,129.9983,103.228,5.3,mww,92,28,2.555,1.36,us,us7000mua7,2024-06-24T10:45:55.291Z,"Kepulauan Babar, Indonesia",earthquake,7.37,6.582,0.103,9,reviewed,us,us
2024-06-24T08:03:38.359Z,-14.6086,167.2485,156.689,6.3,mww,74,32,6.549,0.86,us,us7000mu8s,2024-06-24T08:29:26.993Z,"51 km NNE of Port-Olry, Vanuatu",earthquake,8.95,6.191,0.033,90,reviewed,us,us
2024-06-24T05:36:08.316Z,40.9706,84.2612,10,4.6,mb,86,87,4.261,0.81,us,us7000mu88,2024-06-24T07:06:52.040Z,"138 km SE of Kuqa, China",earthquake,8.06,1.908,0.063,75,reviewed,us,us
2024-06-24T05:04:35.566Z,12.3058,125.46,30.312,4.8,mb,52,72,11.715,0.8,us,us7000mu87,2024-06-24T05:48:45.040Z,"7 km NE of Arteche, Philippines",earthquake,11.02,5.597,0.066,71,reviewed,us,us
"""

HEADER_ONLY = SAMPLE_CSV.splitlines()[0] + "\n"


@pytest.fixture
def sample_csv():
    return SAMPLE_CSV


@pytest.fixture
def header_only():
    return HEADER_ONLY
